"""
Notification API
"""
from fastapi import APIRouter, Depends

from stocktrack.core.permissions import AuthContext
from stocktrack.schemas.stock import StockNotification
from stocktrack.services import NotificationService
from .auth import get_current_active_user

router = APIRouter(tags=["notifications"])

@router.post("/send-notification")
def send_notification(
    data: StockNotification,
    actor: AuthContext = Depends(get_current_active_user)
):
    """Email a low stock alert; runs in the threadpool since SMTP blocks"""
    NotificationService.send_stock_notification(data.product_name, data.current_stock)
    return {"message": "Notification sent successfully"}
