"""Dev seeding helper: sample case files for local runs."""

from backend.portal.config import get_settings
from backend.portal.container import Portal, build_portal
from backend.portal.models.common import CaseStatus
from backend.portal.models.docs import DocumentMetadata

# Admin account from the employee roster
DEV_EMPLOYEE_CODE = "LAW001"

SAMPLE_CASES: tuple[tuple[str, str, DocumentMetadata, CaseStatus], ...] = (
    (
        "Mehta v. Orion Builders",
        "The contract was breached on March 1 when Orion Builders halted construction. "
        "Damages were awarded to the plaintiff for delay and cost overruns.",
        DocumentMetadata(court="High Court", case_number="CS-101/2024", tags=["contract"]),
        CaseStatus.active,
    ),
    (
        "State v. Kapoor",
        "The accused was acquitted after the prosecution failed to produce the seized "
        "documents. The appeal was dismissed on procedural grounds.",
        DocumentMetadata(court="Sessions Court", case_number="CR-77/2023", tags=["criminal"]),
        CaseStatus.closed,
    ),
)


def seed_dev_cases(portal: Portal) -> int:
    """Upload the sample cases unless some document already exists.

    This function is idempotent - safe to run multiple times.

    Returns:
        Number of documents uploaded
    """
    if portal.documents.list_all():
        print("Dev cases already present")
        return 0

    ctx = portal.sessions.login(DEV_EMPLOYEE_CODE, portal.settings.default_origin)
    for title, text, metadata, status in SAMPLE_CASES:
        doc = portal.upload(ctx, title=title, text=text, metadata=metadata, status=status)
        print(f"Uploaded {doc.title} ({doc.id})")
    portal.sessions.logout(ctx)

    print("✅ Dev seeding complete")
    return len(SAMPLE_CASES)


if __name__ == "__main__":
    seed_dev_cases(build_portal(get_settings()))
