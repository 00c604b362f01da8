import logging
from html import escape
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse
from sqlmodel import select
from hospital import config
from hospital.db import get_session
from hospital.models import Booking, Contact, Department, HeroImage, Specialist
from hospital.routes.auth import require_admin
from hospital.routes.departments import DEFAULT_DEPARTMENTS


logger = logging.getLogger(__name__)

router = APIRouter()


STYLE = """
<style>
    body {
        font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif;
        margin: 0;
        padding: 20px;
        background-color: #f5f7fa;
        color: #333;
    }
    .container {
        max-width: 1200px;
        margin: 0 auto;
    }
    header {
        background: linear-gradient(135deg, #0d9488 0%, #2563eb 100%);
        color: white;
        padding: 20px;
        border-radius: 10px;
        margin-bottom: 20px;
        box-shadow: 0 4px 6px rgba(0,0,0,0.1);
    }
    h1 {
        margin: 0;
        font-size: 2em;
    }
    .stats-container, .cards {
        display: grid;
        grid-template-columns: repeat(auto-fit, minmax(220px, 1fr));
        gap: 20px;
        margin-bottom: 30px;
    }
    .stat-card, .card {
        background: white;
        padding: 20px;
        border-radius: 8px;
        box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        text-align: center;
    }
    .card img, .hero img {
        max-width: 100%;
        border-radius: 6px;
    }
    .stat-number {
        font-size: 2em;
        font-weight: bold;
        color: #2563eb;
    }
    .stat-label {
        color: #666;
        margin-top: 5px;
    }
    .section {
        background: white;
        margin-bottom: 30px;
        border-radius: 8px;
        box-shadow: 0 2px 4px rgba(0,0,0,0.1);
        overflow: hidden;
    }
    .section-header {
        background: #f8f9fa;
        padding: 15px 20px;
        border-bottom: 1px solid #eee;
        font-weight: bold;
        color: #495057;
    }
    table {
        width: 100%;
        border-collapse: collapse;
    }
    th, td {
        padding: 12px 15px;
        text-align: left;
        border-bottom: 1px solid #eee;
    }
    th {
        background-color: #f8f9fa;
        font-weight: 600;
        color: #495057;
    }
    .status-pending { color: #b45309; font-weight: bold; }
    .status-confirmed { color: #059669; font-weight: bold; }
    .status-cancelled { color: #dc3545; font-weight: bold; }
    .status-completed { color: #2563eb; font-weight: bold; }
    .no-data {
        text-align: center;
        padding: 40px;
        color: #6c757d;
    }
</style>
"""


def _document(title, body):
    return f"""
    <!DOCTYPE html>
    <html>
    <head>
        <title>{escape(title)}</title>
        {STYLE}
    </head>
    <body>
        <div class="container">
            {body}
        </div>
    </body>
    </html>
    """


def _table(headers, rows, empty_message):
    if not rows:
        return f'<div class="no-data"><h3>{escape(empty_message)}</h3></div>'
    head = "".join(f"<th>{escape(h)}</th>" for h in headers)
    return f"<table><thead><tr>{head}</tr></thead><tbody>{''.join(rows)}</tbody></table>"


@router.get("/", response_class=HTMLResponse)
async def home():
    """Marketing home page"""
    with get_session() as session:
        heroes = session.exec(
            select(HeroImage).where(HeroImage.active == True).order_by(HeroImage.created_at.desc())  # noqa: E712
        ).all()
        departments = [d.name for d in session.exec(select(Department).order_by(Department.name)).all()]
        specialists = session.exec(select(Specialist).order_by(Specialist.created_at.desc())).all()

    hero_html = ""
    if heroes:
        hero_html = f'<div class="hero"><img src="{escape(heroes[0].image, quote=True)}" alt="{escape(config.HOSPITAL_NAME, quote=True)}"></div>'

    department_cards = "".join(
        f'<div class="card"><strong>{escape(name)}</strong></div>' for name in departments or DEFAULT_DEPARTMENTS
    )
    specialist_cards = "".join(
        f'<div class="card"><img src="{escape(s.image, quote=True)}" alt=""><div>{escape(s.name)}</div></div>'
        for s in specialists
    ) or '<p class="no-data">Our specialists will be listed here soon.</p>'

    body = f"""
        <header>
            <h1>{escape(config.HOSPITAL_NAME)}</h1>
            <p>Compassionate care, online and in person. Book your appointment today.</p>
        </header>
        {hero_html}
        <div class="section">
            <div class="section-header">Departments</div>
            <div class="cards" style="padding: 20px;">{department_cards}</div>
        </div>
        <div class="section">
            <div class="section-header">Our Specialists</div>
            <div class="cards" style="padding: 20px;">{specialist_cards}</div>
        </div>
    """
    return _document(config.HOSPITAL_NAME, body)


@router.get("/admin/dashboard", response_class=HTMLResponse, dependencies=[Depends(require_admin)])
async def admin_dashboard():
    """Back-office view of bookings and contact messages"""
    with get_session() as session:
        bookings = session.exec(select(Booking).order_by(Booking.created_at.desc()).limit(100)).all()
        contacts = session.exec(select(Contact).order_by(Contact.created_at.desc()).limit(100)).all()

    pending = sum(1 for b in bookings if b.status == "pending")
    paid = sum(1 for b in bookings if b.payment_status == "PAID")
    unread = sum(1 for c in contacts if c.status == "new")

    booking_rows = [
        f"""
        <tr>
            <td>{b.id}</td>
            <td>{escape(b.name)}<br><small>{escape(b.phone)}</small></td>
            <td>{escape(b.department)}</td>
            <td>{escape(b.date)}</td>
            <td>{escape(b.time)}</td>
            <td>{escape(b.appointment_type)}</td>
            <td>{escape(b.payment_status)}</td>
            <td class="status-{escape(b.status)}">{escape(b.status.title())}</td>
        </tr>
        """
        for b in bookings
    ]
    contact_rows = [
        f"""
        <tr>
            <td>{escape(c.name)}</td>
            <td>{escape(c.email)}<br><small>{escape(c.phone)}</small></td>
            <td>{escape(c.message)}</td>
            <td>{escape(c.status)}</td>
            <td>{c.created_at.strftime('%Y-%m-%d %H:%M')}</td>
        </tr>
        """
        for c in contacts
    ]

    body = f"""
        <header>
            <h1>Admin Dashboard</h1>
            <p>Appointments and messages for {escape(config.HOSPITAL_NAME)}</p>
        </header>
        <div class="stats-container">
            <div class="stat-card"><div class="stat-number">{len(bookings)}</div><div class="stat-label">Recent Bookings</div></div>
            <div class="stat-card"><div class="stat-number">{pending}</div><div class="stat-label">Awaiting Confirmation</div></div>
            <div class="stat-card"><div class="stat-number">{paid}</div><div class="stat-label">Paid Bookings</div></div>
            <div class="stat-card"><div class="stat-number">{unread}</div><div class="stat-label">New Messages</div></div>
        </div>
        <div class="section">
            <div class="section-header">Bookings</div>
            {_table(["#", "Patient", "Department", "Date", "Time", "Type", "Payment", "Status"], booking_rows, "No bookings yet")}
        </div>
        <div class="section">
            <div class="section-header">Contact Messages</div>
            {_table(["Name", "Contact", "Message", "Status", "Received"], contact_rows, "No messages yet")}
        </div>
    """
    return _document("Admin Dashboard", body)
