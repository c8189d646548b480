#!/usr/bin/env python3
"""
Allocate a student number (or peek at the next counter value) from the shell.

Usage:
  python scripts/allocate_student_number.py 101 2024-2025
  python scripts/allocate_student_number.py 101 2024-2025 --peek
  # Requires DATABASE_URL in .env (or export)
"""
import argparse
import asyncio
import os
import sys

# Load .env from project root
try:
    from dotenv import load_dotenv
    _root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    load_dotenv(os.path.join(_root, ".env"))
except ImportError:
    pass

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from registrar.core.exceptions import RegistrarError
from registrar.database import AsyncSessionLocal, close_db
from registrar.services.student_number_service import StudentNumberService, resolve_course_code


async def run(course_id: int, school_year: str, peek: bool) -> None:
    try:
        async with AsyncSessionLocal() as db:
            if peek:
                code = resolve_course_code(course_id)
                value = await StudentNumberService.peek_next_sequence(db, code, school_year)
                print(f"Next counter value for {code} {school_year}: {value}")
            else:
                number = await StudentNumberService.allocate(db, course_id, school_year)
                print(number)
    finally:
        await close_db()


def main():
    parser = argparse.ArgumentParser(description=__doc__.strip().splitlines()[0])
    parser.add_argument("course_id", type=int)
    parser.add_argument("school_year")
    parser.add_argument("--peek", action="store_true", help="Show the next counter value only")
    args = parser.parse_args()

    if not os.getenv("DATABASE_URL"):
        print("ERROR: DATABASE_URL must be set. Add to .env or export.")
        sys.exit(1)
    try:
        asyncio.run(run(args.course_id, args.school_year, args.peek))
    except RegistrarError as e:
        print(f"FAILED: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
