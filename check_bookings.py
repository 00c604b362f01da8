"""Script to list upcoming bookings in the database"""
import sys
from datetime import date
from dotenv import load_dotenv
from sqlmodel import select
from hospital.db import get_session
from hospital.models import Booking

load_dotenv()


def check_bookings(department=None):
    """Print non-cancelled bookings from today onwards"""
    with get_session() as session:
        stmt = select(Booking).where(Booking.date >= date.today().isoformat(), Booking.status != "cancelled")
        if department:
            stmt = stmt.where(Booking.department == department)
        bookings = session.exec(stmt.order_by(Booking.date, Booking.department)).all()
        if bookings:
            print(f"Found {len(bookings)} upcoming bookings:")
            for booking in bookings:
                print(f"- {booking.date} {booking.time} | {booking.department} | {booking.name} ({booking.status})")
        else:
            print("No upcoming bookings found.")

if __name__ == "__main__":
    check_bookings(sys.argv[1] if len(sys.argv) > 1 else None)
