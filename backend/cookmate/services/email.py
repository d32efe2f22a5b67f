"""Email sending and one-time-code message formatting."""

from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
import logging
import smtplib

from fastapi import Request

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    pass


class EmailClient:
    """SMTP client for transactional mail."""

    def __init__(
        self,
        smtp_host: str,
        smtp_port: int,
        smtp_user: str,
        smtp_password: str,
        from_email: str,
    ):
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_password = smtp_password
        self.from_email = from_email

    @classmethod
    def from_settings(cls, settings) -> "EmailClient":
        return cls(
            smtp_host=settings.SMTP_HOST,
            smtp_port=settings.SMTP_PORT,
            smtp_user=settings.SMTP_USER,
            smtp_password=settings.SMTP_PASSWORD,
            from_email=settings.FROM_EMAIL or settings.SMTP_USER,
        )

    def send(self, to_email: str, subject: str, html_body: str, text_body: str) -> None:
        if not self.smtp_host or not self.from_email:
            raise EmailDeliveryError("SMTP is not configured")

        msg = MIMEMultipart("alternative")
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to_email
        msg.attach(MIMEText(text_body, "plain"))
        msg.attach(MIMEText(html_body, "html"))

        try:
            with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=30) as server:
                server.starttls()
                if self.smtp_user and self.smtp_password:
                    server.login(self.smtp_user, self.smtp_password)
                server.sendmail(self.from_email, [to_email], msg.as_string())
        except (smtplib.SMTPException, OSError) as exc:
            raise EmailDeliveryError(str(exc)) from exc
        logger.info("Sent '%s' email to %s", subject, to_email)


def get_email_client(request: Request) -> EmailClient:
    return request.app.state.email_client


_PURPOSES = {
    "verify": (
        "CookMate - Email Verification OTP",
        "Thank you for signing up. Please verify your email address using the code below:",
    ),
    "reset": (
        "CookMate - Password Reset Code",
        "We received a request to reset your password. Use the code below to choose a new one:",
    ),
}


def build_otp_email(name: str, code: str, purpose: str, expiry_minutes: int) -> tuple[str, str, str]:
    """Build subject, HTML body and text body for a one-time-code email."""
    subject, intro = _PURPOSES[purpose]

    html_body = f"""
    <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
      <h1 style="background-color: #16a34a; color: white; padding: 20px; text-align: center;">CookMate</h1>
      <h2>Hello, {name}!</h2>
      <p>{intro}</p>
      <p style="font-size: 32px; font-weight: bold; color: #16a34a; letter-spacing: 5px; text-align: center;">{code}</p>
      <p><strong>This code will expire in {expiry_minutes} minutes.</strong></p>
      <p>If you didn't request this, please ignore this email.</p>
    </div>
    """

    lines = [
        f"Hello, {name}!",
        "",
        intro,
        "",
        f"    {code}",
        "",
        f"This code will expire in {expiry_minutes} minutes.",
        "If you didn't request this, please ignore this email.",
    ]
    return subject, html_body, "\n".join(lines)
