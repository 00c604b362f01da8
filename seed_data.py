"""Seed the database with the hospital's departments, doctors and default slot templates"""
import json
from dotenv import load_dotenv
from sqlmodel import select
from hospital.db import get_session, init_db
from hospital.models import Department, DepartmentTemplate, Doctor
from hospital.services.availability import HARDCODED_DEFAULTS

load_dotenv()


DEPARTMENTS = ["Pulmonology", "Orthopedics", "Gynaecology", "ENT"]

DOCTORS = [
    {"name": "Dr. Ananya Rao", "department": "Pulmonology", "specialty": "Respiratory Medicine", "qualification": "MD, DM"},
    {"name": "Dr. Vikram Shetty", "department": "Orthopedics", "specialty": "Joint Replacement", "qualification": "MS (Ortho)"},
    {"name": "Dr. Meera Iyer", "department": "Gynaecology", "specialty": "Obstetrics", "qualification": "MD, DGO"},
    {"name": "Dr. Arjun Nair", "department": "ENT", "specialty": "Head & Neck Surgery", "qualification": "MS (ENT)"},
]


def seed_data(force_replace=False):
    """Seed departments, doctors and slot templates; skipped when departments already exist"""
    with get_session() as session:
        existing = session.exec(select(Department)).all()
        if existing and not force_replace:
            print("Departments already exist in the database. Skipping seed.")
            return

        if force_replace:
            print("Force replacing departments, doctors and templates...")
            for model in (Doctor, DepartmentTemplate, Department):
                for row in session.exec(select(model)).all():
                    session.delete(row)
            session.commit()

        template = json.dumps([{"time": label, "status": "available"} for label in HARDCODED_DEFAULTS])
        for name in DEPARTMENTS:
            session.add(Department(name=name))
            session.add(DepartmentTemplate(department=name, slots=template))
        for doctor_data in DOCTORS:
            session.add(Doctor(**doctor_data))

        session.commit()
        print(f"Seeded {len(DEPARTMENTS)} departments and {len(DOCTORS)} doctors.")


if __name__ == "__main__":
    init_db()
    seed_data(force_replace=True)
