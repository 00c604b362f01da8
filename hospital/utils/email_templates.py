from datetime import datetime
from html import escape

from hospital import config


LAYOUT = """
<div style="font-family: 'Segoe UI', Tahoma, Geneva, Verdana, sans-serif; max-width: 600px; margin: 0 auto; background: #f5f7fa; padding: 20px;">
    <div style="background: linear-gradient(135deg, #0d9488 0%, #2563eb 100%); color: white; padding: 20px; border-radius: 10px 10px 0 0;">
        <h2 style="margin: 0;">{hospital}</h2>
    </div>
    <div style="background: white; padding: 24px; border-radius: 0 0 10px 10px;">
        <div style="display: inline-block; background: {badge_bg}; color: {badge_color}; padding: 6px 12px; border-radius: 6px; font-weight: bold;">{badge}</div>
        <h3 style="color: #333;">{title}</h3>
        <p style="color: #555;">{intro}</p>
        {body}
    </div>
    <p style="color: #999; font-size: 12px; text-align: center;">{footer}</p>
</div>
"""

STATUS_STYLES = {
    "confirmed": ("#059669", "#D1FAE5"),
    "cancelled": ("#DC2626", "#FEE2E2"),
    "completed": ("#2563EB", "#DBEAFE"),
    "pending": ("#B45309", "#FEF3C7"),
}


def _page(title, intro, body, badge, status="pending"):
    color, bg = STATUS_STYLES.get(status, STATUS_STYLES["pending"])
    return LAYOUT.format(
        hospital=escape(config.HOSPITAL_NAME),
        title=escape(title),
        intro=escape(intro),
        body=body,
        badge=escape(badge),
        badge_color=color,
        badge_bg=bg,
        footer=f"Auto-generated notification | {datetime.now().strftime('%d %b %Y, %I:%M %p')}",
    )


def _rows(pairs):
    rows = "".join(
        f'<tr><td style="padding: 6px 10px; color: #666;">{escape(label)}</td>'
        f'<td style="padding: 6px 10px; font-weight: 600;">{escape(str(value))}</td></tr>'
        for label, value in pairs
        if value not in (None, "")
    )
    return f'<table style="width: 100%; border-collapse: collapse;">{rows}</table>'


def _booking_rows(booking):
    return _rows([
        ("Patient", booking.name),
        ("Email", booking.email),
        ("Phone", booking.phone),
        ("Department", booking.department),
        ("Date", booking.date),
        ("Time", booking.time),
        ("Consultation", "Online (video)" if booking.appointment_type == "Online" else "In-person visit"),
        ("Message", booking.message),
    ])


def _receipt(booking):
    if not booking.payment_id or not booking.amount_paid:
        return ""
    return (
        '<h4 style="color: #333;">Payment receipt</h4>'
        + _rows([
            ("Amount paid", f"₹{booking.amount_paid:g}"),
            ("Payment ID", booking.payment_id),
            ("Order ID", booking.order_id),
            ("Paid on", booking.created_at.strftime("%d %b %Y, %I:%M %p") if booking.created_at else ""),
        ])
    )


def _meeting(booking):
    if not booking.meeting_link:
        return ""
    link = escape(booking.meeting_link, quote=True)
    password = (
        f'<p style="color: #555;">Meeting password: <strong>{escape(booking.meeting_password)}</strong></p>'
        if booking.meeting_password else ""
    )
    return (
        '<h4 style="color: #333;">Zoom video consultation</h4>'
        f'<p><a href="{link}" style="background: #2563eb; color: white; padding: 10px 18px; '
        f'border-radius: 6px; text-decoration: none;">Join Zoom meeting</a></p>{password}'
    )


def booking_received_template(booking):
    """Patient email right after a booking request is stored."""
    if booking.appointment_type == "Online":
        intro = "Your Zoom meeting link will be sent once we confirm your appointment."
    else:
        intro = "Please visit the hospital at your scheduled time after confirmation."
    if booking.payment_id:
        subject = f"Payment ₹{booking.amount_paid:g} Received - Awaiting Confirmation"
    else:
        subject = f"Appointment Request Received - {booking.department}"
    html = _page("Appointment request received", intro, _booking_rows(booking) + _receipt(booking), "PENDING CONFIRMATION")
    return subject, html


def admin_new_booking_template(booking):
    paid = booking.payment_status == "PAID"
    if paid:
        subject = f"New PAID Booking | {booking.name} | {booking.department} | ₹{booking.amount_paid:g}"
    else:
        subject = f"New Booking | {booking.name} | {booking.department}"
    attachment = '<p style="color: #555;">An attachment is available in the admin dashboard.</p>' if booking.file_data else ""
    dashboard = escape(f"{config.SITE_URL}/admin/dashboard", quote=True)
    body = (
        _booking_rows(booking)
        + _rows([("Payment", f"PAID ₹{booking.amount_paid:g}" if paid else "UNPAID")])
        + attachment
        + f'<p><a href="{dashboard}">Open admin dashboard</a></p>'
    )
    return subject, _page("New appointment", "Action required: review and confirm this appointment.", body, "NEW BOOKING")


STATUS_COPY = {
    "confirmed": ("Appointment Confirmed!", "Please visit the hospital at your scheduled time.", "CONFIRMED"),
    "cancelled": ("Appointment Cancelled", "Your appointment was cancelled. Contact us for rescheduling.", "CANCELLED"),
    "completed": ("Appointment Completed", "Thank you for choosing us!", "COMPLETED"),
}


def status_update_template(booking, status, next_slot=None):
    """Patient email for an admin status change; ``None`` for statuses without one."""
    if status not in STATUS_COPY:
        return None
    title, intro, badge = STATUS_COPY[status]
    body = _booking_rows(booking)

    if status == "confirmed" and booking.meeting_link:
        title = "Online Consultation Confirmed!"
        intro = "Your Zoom meeting link is ready below. Join at your scheduled time."
        badge = "ZOOM MEETING READY"
        body += _meeting(booking)
        subject = f"Confirmed | Zoom Meeting Link - {booking.department}"
    elif status == "confirmed":
        subject = f"Appointment Confirmed - {booking.department}"
    elif status == "cancelled":
        subject = f"Appointment Cancelled - {booking.department}"
        if booking.cancel_reason:
            body += _rows([("Reason", booking.cancel_reason)])
        if next_slot:
            intro = "Your appointment was postponed. See the next available slot below."
            badge = "POSTPONED"
            body += '<h4 style="color: #333;">Next available slot</h4>' + _rows([
                ("Date", next_slot["date"]),
                ("Time", next_slot["time"]),
                ("Department", next_slot["department"]),
            ])
    else:
        subject = f"Thank You - {booking.department}"

    body += _receipt(booking)
    return subject, _page(title, intro, body, badge, status)


def admin_status_update_template(booking, status):
    subject = f"{status.capitalize()}: {booking.name} | {booking.department}"
    body = _booking_rows(booking)
    if booking.meeting_link:
        body += _rows([("Meeting link", booking.meeting_link), ("Host link", booking.host_link)])
    return subject, _page(f"Booking {status.upper()}", "A booking status was updated.", body, status.upper(), status)


def contact_notification_template(contact):
    subject = f"New Contact Message - {contact.name}"
    body = _rows([
        ("Name", contact.name),
        ("Email", contact.email),
        ("Phone", contact.phone),
        ("Message", contact.message),
    ])
    return subject, _page("New contact message", f"{config.HOSPITAL_NAME} - Contact Form", body, "NEW MESSAGE")
