# scripts/seed_demo.py
"""Register the demo donors and hospitals through the public API."""
import logging
import sys

from bloodbridge.client import AppController
from bloodbridge.core.config import settings

PASSWORD = "password123"

DONORS = [
    {"email": "donor1@example.com", "name": "John Smith", "blood_group": "A+", "age": 28, "phone_number": "555-1234"},
    {"email": "donor2@example.com", "name": "Sarah Johnson", "blood_group": "O-", "age": 35, "phone_number": "555-5678"},
    {"email": "donor3@example.com", "name": "Michael Brown", "blood_group": "B+", "age": 42, "phone_number": "555-9012"},
    {"email": "donor4@example.com", "name": "Emily Davis", "blood_group": "AB+", "age": 31, "phone_number": "555-3456"},
    {"email": "donor5@example.com", "name": "Daniel Wilson", "blood_group": "A-", "age": 25, "phone_number": "555-7890"},
]

HOSPITALS = [
    {"email": "hospital1@example.com", "name": "City General Hospital", "address": "123 Medical Drive, Healthcare City",
     "blood_group": "O-", "quantity": 1500, "urgency": "High"},
    {"email": "hospital2@example.com", "name": "Memorial Medical Center", "address": "456 Health Avenue, Wellness Town",
     "blood_group": "A+", "quantity": 1000, "urgency": "Medium"},
    {"email": "hospital3@example.com", "name": "Community Hospital", "address": "789 Care Street, Healing Village",
     "blood_group": "B+", "quantity": 800, "urgency": "Low"},
    {"email": "hospital4@example.com", "name": "University Medical Center", "address": "321 Research Blvd, Academia City",
     "blood_group": "AB+", "quantity": 1200, "urgency": "Medium"},
    {"email": "hospital5@example.com", "name": "Children's Hospital", "address": "654 Pediatric Lane, Careville",
     "blood_group": "O+", "quantity": 500, "urgency": "High"},
]

def main(base_url: str) -> None:
    ctl = AppController(base_url)
    for role, rows, submit in (("donor", DONORS, ctl.submit_donation),
                               ("hospital", HOSPITALS, ctl.submit_request)):
        for row in rows:
            if not ctl.auth.sign_up({**row, "role": role, "password": PASSWORD}):
                continue
            fields = {k: v for k, v in row.items() if k != "email"}
            submit(fields)
            ctl.logout()
    logging.info("seeded %d donors, %d hospitals", len(DONORS), len(HOSPITALS))

if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main(sys.argv[1] if len(sys.argv) > 1 else settings.api_base)
