"""Example: Driving a panel page with the async controllers.

Loads an HTML page of the admin panel, initializes it like a browser would,
and prints the rendered result together with the notifications and the
navigation the page requested.

Usage:
    python examples/example_panel.py path/to/Guvohnomalar-list.html
"""

import asyncio
import logging
import sys

from dotenv import load_dotenv

from guvohnoma_admin import AdminPanel, FileStorage, LoggingNotifier, Page, SessionContext

load_dotenv()
logging.basicConfig(level=logging.INFO, format="%(name)s - %(levelname)s - %(message)s")


async def main(path: str):
    """Main async function."""
    session = SessionContext(FileStorage())
    page = Page.from_file(path, confirm=lambda message: input(f"{message} [y/N] ").lower() == "y")
    notifier = LoggingNotifier()

    async with AdminPanel(session=session) as panel:
        controllers = await panel.open_page(page, notifier=notifier)

        if controllers.documents is not None and page.has_element("certificates-table-body"):
            print(f"Certificates on page: {page.text('totalCertificates') or page.text('totalCount')}")

        if controllers.students is not None and page.has_element("students-table-body"):
            print(f"Students on page: {page.text('totalStudents')}")

    for notice in notifier.notices:
        print(f"[{notice.level.value}] {notice.message}")

    if page.last_navigation:
        print(f"Requested navigation to {page.last_navigation.url} after {page.last_navigation.delay}s")


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)

    asyncio.run(main(sys.argv[1]))
