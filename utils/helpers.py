"""
Helpers Module - Contact email rendering and JSON response helpers
"""

from datetime import datetime
from flask import jsonify
from markupsafe import escape


CONTACT_SUBJECT = 'New Contact Form Submission'


def render_contact_html(submission, year=None):
    """Render the HTML card sent to the site owner; every value is escaped"""
    year = year or datetime.now().year
    return f"""
<div style="font-family: Arial, sans-serif; max-width: 600px; margin: auto; padding: 20px; border: 1px solid #ddd; border-radius: 10px;">
  <h2 style="color: #333; text-align: center;">{CONTACT_SUBJECT}</h2>
  <div style="background-color: #f8f9fa; border-radius: 8px; padding: 15px; margin: 20px 0;">
    <p style="margin: 5px 0;"><strong>Name:</strong> {escape(submission.name)}</p>
    <p style="margin: 5px 0;"><strong>Email:</strong> {escape(submission.email)}</p>
    <p style="margin: 5px 0;"><strong>Message:</strong></p>
    <p style="margin: 5px 0; white-space: pre-wrap;">{escape(submission.message)}</p>
  </div>
  <div style="margin-top: 30px; padding-top: 20px; border-top: 1px solid #eee; text-align: center; color: #777; font-size: 12px;">
    <p>&copy; {year} Portfolio Contact Form. All rights reserved.</p>
  </div>
</div>
""".strip()


def render_contact_text(submission):
    return (
        f"{CONTACT_SUBJECT}\n\n"
        f"Name: {submission.name}\n"
        f"Email: {submission.email}\n\n"
        f"Message:\n"
        f"{submission.message}\n"
    )


def error_response(message, status_code, **extra):
    """JSON error body in the shape every endpoint uses: {'error': ...}"""
    body = {'error': message}
    body.update({k: v for k, v in extra.items() if v is not None})
    response = jsonify(body)
    response.status_code = status_code
    return response


__all__ = [
    'CONTACT_SUBJECT',
    'render_contact_html',
    'render_contact_text',
    'error_response'
]
