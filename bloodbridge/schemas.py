from datetime import datetime
from typing import Annotated, Any, Dict, Literal, Optional, Union, get_args

from pydantic import BaseModel, ConfigDict, EmailStr, Field, TypeAdapter

# --------------------------
# Enumerations
# --------------------------
Role = Literal["donor", "hospital"]
BloodGroup = Literal["A+", "A-", "B+", "B-", "AB+", "AB-", "O+", "O-"]
Urgency = Literal["High", "Medium", "Low"]
EventType = Literal["INSERT", "UPDATE", "DELETE"]

ROLES = list(get_args(Role))
BLOOD_GROUPS = list(get_args(BloodGroup))
URGENCY_LEVELS = list(get_args(Urgency))

Text = Annotated[str, Field(min_length=1)]

class _Strict(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True, extra="forbid")

# --------------------------
# Profiles / rows
# --------------------------
class DonorProfile(_Strict):
    email: EmailStr
    name: Text
    blood_group: BloodGroup
    age: int = Field(ge=18)
    phone_number: Text

class HospitalProfile(_Strict):
    email: EmailStr
    name: Text
    address: Text
    blood_group: BloodGroup
    quantity: int = Field(gt=0)
    urgency: Urgency

# table name -> schema a row must satisfy before insert
TABLE_SCHEMAS: Dict[str, type[_Strict]] = {
    "donor_info": DonorProfile,
    "hospital_info": HospitalProfile,
    "blood_donations": DonorProfile,
    "blood_requests": HospitalProfile,
}
PROFILE_TABLES: Dict[str, str] = {"donor": "donor_info", "hospital": "hospital_info"}
FILTERABLE_COLUMNS = ("email", "blood_group", "urgency")

# --------------------------
# Signup (tagged union on role)
# --------------------------
class DonorSignUp(DonorProfile):
    role: Literal["donor"] = "donor"
    password: Text

    def profile(self) -> DonorProfile:
        return DonorProfile(**self.model_dump(exclude={"role", "password"}))

class HospitalSignUp(HospitalProfile):
    role: Literal["hospital"] = "hospital"
    password: Text

    def profile(self) -> HospitalProfile:
        return HospitalProfile(**self.model_dump(exclude={"role", "password"}))

SignUpData = Annotated[Union[DonorSignUp, HospitalSignUp], Field(discriminator="role")]
signup_adapter = TypeAdapter(SignUpData)

class LoginData(_Strict):
    email: EmailStr
    password: Text
    role: Role

# --------------------------
# Provider: identity
# --------------------------
class CreateUserIn(BaseModel):
    email: EmailStr
    password: str
    metadata: Dict[str, Any] = {}

class SignInIn(BaseModel):
    email: EmailStr
    password: str

class UserOut(BaseModel):
    id: str
    email: EmailStr
    role: Optional[Role] = None

class AuthOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserOut

class SessionOut(BaseModel):
    user: UserOut
    expires_at: datetime

# --------------------------
# Provider: change feed
# --------------------------
class ChangeEvent(BaseModel):
    seq: int
    table: str
    type: EventType
    row: Dict[str, Any]
    created_at: datetime

class EventsOut(BaseModel):
    events: list[ChangeEvent]
    last_seq: int

# --------------------------
# Stats
# --------------------------
class DashboardStats(BaseModel):
    total: int = 0
    recent: int = 0
    matched: int = 0
