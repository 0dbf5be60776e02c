"""Property model for rental listings."""

from dataclasses import dataclass

INCOME_TO_RENT_RATIO = 3


@dataclass(frozen=True)
class Property:
    """Rental property from the static catalog."""

    property_id: str
    title: str
    city: str
    rent: int  # Monthly rent, whole currency units
    beds: int
    baths: float
    image: str = ""

    @property
    def minimum_income(self) -> int:
        """Monthly income an applicant needs to qualify."""
        return self.rent * INCOME_TO_RENT_RATIO
