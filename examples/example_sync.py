"""Example: Reading panel data with the synchronous client."""

from dotenv import load_dotenv

from guvohnoma_admin import GuvohnomaClient, format_date

# Load GUVOHNOMA_API_URL from .env file
load_dotenv()

with GuvohnomaClient() as client:
    print(f"=== Guvohnoma API at {client.base_url} ===\n")

    # Dashboard counters
    print("1. Getting dashboard...")
    dashboard = client.get_dashboard()
    print(f"Users: {dashboard.users}, students: {dashboard.students}, documents: {dashboard.documents}")

    # Certificates
    print("\n2. Listing certificates...")
    documents = client.get_documents()
    print(f"Found {len(documents)} certificates:")

    for document in documents[:5]:  # Show first 5
        categories = ", ".join(c.value for c in document.categories) or "N/A"
        print(f"  №{document.display_number} {document.student_name} [{categories}] exam {format_date(document.exam_date)}")

    # Students
    print("\n3. Listing students...")
    students = client.get_students()
    print(f"Found {len(students)} students:")

    for student in students[:5]:
        print(f"  - {student.full_name} ({student.jshshir}) {student.display_phone}")

    print("\n=== Done ===")
