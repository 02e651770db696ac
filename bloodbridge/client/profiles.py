# bloodbridge/client/profiles.py
from typing import List, Optional

from bloodbridge.client.api_client import ApiClient
from bloodbridge.schemas import DonorProfile, HospitalProfile, PROFILE_TABLES


class ProfileRepository:
    """Read/insert access to the profile and submission tables."""

    def __init__(self, api: ApiClient):
        self.api = api

    def _one(self, table: str, email: str) -> Optional[dict]:
        rows = self.api.select(table, email=email)
        return rows[0] if rows else None

    # Profiles
    def get_profile(self, role: str, email: str) -> Optional[dict]:
        return self._one(PROFILE_TABLES[role], email)

    def get_donor(self, email: str) -> Optional[dict]:
        return self._one("donor_info", email)

    def get_hospital(self, email: str) -> Optional[dict]:
        return self._one("hospital_info", email)

    def get_all_donors(self) -> List[dict]:
        return self.api.select("donor_info")

    def get_all_hospitals(self) -> List[dict]:
        return self.api.select("hospital_info")

    def insert_profile(self, profile: DonorProfile | HospitalProfile) -> dict:
        table = "donor_info" if isinstance(profile, DonorProfile) else "hospital_info"
        return self.api.insert(table, profile.model_dump())

    # Submissions
    def submit_donation(self, donation: DonorProfile) -> dict:
        return self.api.insert("blood_donations", donation.model_dump())

    def submit_request(self, request: HospitalProfile) -> dict:
        return self.api.insert("blood_requests", request.model_dump())

    def list_donations(self, email: Optional[str] = None) -> List[dict]:
        return self.api.select("blood_donations", email=email)

    def list_requests(self, email: Optional[str] = None, urgency: Optional[str] = None) -> List[dict]:
        return self.api.select("blood_requests", email=email, urgency=urgency)
