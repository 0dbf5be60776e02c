"""Display attributes for each application status."""

from dataclasses import dataclass

from rentals.models.enums import ApplicationStatus


@dataclass(frozen=True)
class StatusDisplay:
    """How a status is presented to the applicant."""

    label: str
    color: str
    icon: str
    message: str


STATUS_DISPLAY: dict[ApplicationStatus, StatusDisplay] = {
    ApplicationStatus.PENDING: StatusDisplay(
        label="Pending",
        color="yellow",
        icon="⏳",
        message="Your application is being reviewed.",
    ),
    ApplicationStatus.APPROVED: StatusDisplay(
        label="Approved",
        color="green",
        icon="✓",
        message="Congratulations! Your application has been approved.",
    ),
    ApplicationStatus.REJECTED: StatusDisplay(
        label="Rejected",
        color="red",
        icon="✗",
        message="Unfortunately, your application was not approved.",
    ),
}


def status_display(status: ApplicationStatus) -> StatusDisplay:
    """Look up the display attributes for ``status``."""
    return STATUS_DISPLAY[ApplicationStatus(status)]
