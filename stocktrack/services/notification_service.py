"""
Notification Service - Low stock email alerts
"""
import logging
import smtplib
from email.message import EmailMessage

from stocktrack.core import settings
from stocktrack.core.exceptions import NotificationError

logger = logging.getLogger(__name__)

class NotificationService:
    """Outbound email. Sends once; failures are reported, not retried."""
    
    @staticmethod
    def build_stock_alert(product_name: str, current_stock: int) -> EmailMessage:
        message = EmailMessage()
        message["Subject"] = "Stock Alert: Low Stock Level"
        message["From"] = settings.ALERT_SENDER or settings.SMTP_USER or f"no-reply@{settings.SMTP_HOST}"
        message["To"] = settings.ALERT_RECIPIENT
        message.set_content(
            f"The stock for {product_name} has reached a low level of {current_stock}. "
            f"Please restock as soon as possible."
        )
        return message
    
    @staticmethod
    def send_stock_notification(product_name: str, current_stock: int) -> None:
        if not settings.ALERT_RECIPIENT:
            logger.error("Stock notification not sent: ALERT_RECIPIENT is not configured")
            raise NotificationError()
        
        message = NotificationService.build_stock_alert(product_name, current_stock)
        
        try:
            with smtplib.SMTP(settings.SMTP_HOST, settings.SMTP_PORT, timeout=settings.SMTP_TIMEOUT) as smtp:
                if settings.SMTP_USE_TLS:
                    smtp.starttls()
                if settings.SMTP_USER and settings.SMTP_PASSWORD:
                    smtp.login(settings.SMTP_USER, settings.SMTP_PASSWORD)
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as e:
            logger.exception(f"Error sending stock notification for {product_name}: {e}")
            raise NotificationError()
        
        logger.info(f"Stock notification sent for {product_name} (stock {current_stock})")
