from flask import Blueprint, jsonify, g
from sqlalchemy.orm import joinedload

from models import storage
from models.notification import Notification
from models.schemas.notification import NotificationOutSchema
from utils.decorators import jwt_required

bp = Blueprint("notifications", __name__)

notifications_out_schema = NotificationOutSchema(many=True)


@bp.get("/notifications")
@jwt_required()
def list_notifications():
    """
    Notifications of the authenticated user, newest first
    ---
    tags:
      - Notifications
    security:
      - Bearer: []
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
    """
    session = storage.get_session()
    rows = (
        session.query(Notification)
        .options(joinedload(Notification.sender))
        .filter(Notification.recipient_id == g.current_user.id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
        .all()
    )
    return jsonify({"data": notifications_out_schema.dump(rows)}), 200


@bp.put("/notifications/read")
@jwt_required()
def mark_notifications_read():
    """
    Mark every unread notification of the authenticated user as read
    ---
    tags:
      - Notifications
    security:
      - Bearer: []
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
    """
    session = storage.get_session()
    updated = (
        session.query(Notification)
        .filter(Notification.recipient_id == g.current_user.id, Notification.is_read.is_(False))
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    storage.save()
    return jsonify({"message": "Notifications marked as read", "updated": updated}), 200
