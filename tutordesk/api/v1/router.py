# tutordesk/api/v1/router.py
from fastapi import APIRouter
from tutordesk.api.v1 import auth, students, payments, teachers

api_router = APIRouter()

api_router.include_router(auth.router,     prefix="/auth",     tags=["auth"])
api_router.include_router(students.router, prefix="/students", tags=["students"])
api_router.include_router(teachers.router, prefix="/teachers", tags=["teachers"])
api_router.include_router(payments.router, prefix="/payments", tags=["payments"])
