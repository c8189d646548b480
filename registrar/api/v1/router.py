"""API V1 Router"""

from fastapi import APIRouter

from registrar.api.v1.endpoints import courses, student_numbers, students

api_router = APIRouter()

api_router.include_router(courses.router, prefix="/courses", tags=["Courses"])
api_router.include_router(student_numbers.router, prefix="/student-numbers", tags=["Student Numbers"])
api_router.include_router(students.router, prefix="/students", tags=["Student Management"])
