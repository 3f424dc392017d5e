# backend-server/app/api/v1/api.py
from fastapi import APIRouter
from app.api.v1.endpoints import auth, employees, leaves, reports

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(employees.router, prefix="/employees", tags=["Employees"])
api_router.include_router(leaves.router, prefix="/leaves", tags=["Leaves"])
api_router.include_router(reports.router, prefix="/reports", tags=["Reports"])

@api_router.get("/health", tags=["Health"])
def health():
    return {"status": "OK", "message": "Server is running"}
