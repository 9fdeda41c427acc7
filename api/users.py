from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.user import User
from models.schemas.user import UserOutSchema, UserUpdateSchema
from utils.decorators import jwt_required

bp = Blueprint("users", __name__)

user_update_schema = UserUpdateSchema()
user_out_schema = UserOutSchema()


@bp.put("/users/update")
@jwt_required()
def update_profile():
    """
    Update username and/or email of the authenticated user
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             username: { type: string }
             email: { type: string }
    responses:
      200: { description: OK }
      401: { description: Unauthorized }
      404: { description: User not found }
      409: { description: Username or email already taken }
    """
    payload = request.get_json(silent=True) or {}
    data = user_update_schema.load(payload)

    session = storage.get_session()
    user = storage.get(User, g.current_user.id)
    if not user:
        abort(404, description="User not found")

    username = data.get("username")
    email = data.get("email")
    if username and username != user.username:
        if session.query(User).filter(User.username == username).first():
            abort(409, description="Username already taken")
        user.username = username
    if email and email != user.email:
        if session.query(User).filter(User.email == email).first():
            abort(409, description="Email already registered")
        user.email = email

    user.save()
    return jsonify(
        {
            "message": "Profile updated successfully",
            "data": user_out_schema.dump(user),
        }
    ), 200
