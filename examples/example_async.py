"""Example: Registering a student and issuing a certificate with the async client."""

import asyncio

from dotenv import load_dotenv

from guvohnoma_admin import (
    APIError,
    AsyncGuvohnomaClient,
    Category,
    DocumentInput,
    Student,
    verification_url,
)

load_dotenv()


async def main():
    """Main async function."""
    async with AsyncGuvohnomaClient() as client:
        print("=== Async Guvohnoma Example ===\n")

        student = Student(
            jshshir="12345678901234",
            full_name="Aliyev Vali Olimovich",
            birth_date="2000-05-01",
            phone="+998901234567",
        )

        print("1. Registering student...")
        try:
            await client.create_student(student)
        except APIError as e:
            print(f"Student not created ({e.status_code}): {e}")

        print("2. Issuing certificate...")
        result = await client.create_document(
            DocumentInput(
                student_jshshir=student.jshshir,
                student_name=student.full_name,
                course_start="2024-01-15",
                course_end="2024-03-15",
                exam_date="2024-03-20",
                categories=[Category.B, Category.C],
                grade1=5,
                grade2=4,
                commission_number="K-12",
            )
        )
        print(f"Certificate number: {result.certificate_number}")
        print(f"Verification URL: {verification_url(result.certificate_number or str(result.id))}")

        # Parallel reads
        print("\n3. Fetching counters and lists concurrently...")
        dashboard, documents, students = await asyncio.gather(
            client.get_dashboard(),
            client.get_documents(),
            client.get_students(),
        )
        print(f"Dashboard: {dashboard.documents} documents, {dashboard.students} students")
        print(f"Listed: {len(documents)} documents, {len(students)} students")

        print("\n=== Done ===")


if __name__ == "__main__":
    asyncio.run(main())
