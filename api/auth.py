"""
Authentication blueprint:
- POST /auth/register
- POST /auth/login
- POST /auth/refresh
- GET  /auth/profile

Register and login issue a short-lived access token and a long-lived refresh token.
The refresh token is stored on the user; a newer login overwrites it, which makes
the previous one useless for /auth/refresh.
"""
from __future__ import annotations

import logging

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.user import User
from models.schemas.user import UserCreateSchema, UserOutSchema, UserLoginSchema
from utils.decorators import jwt_required, get_token_service
from utils.security import hash_password, verify_password
from utils.sessions import start_session, exchange_refresh_token
from utils.tokens import InvalidTokenError, MissingTokenError

logger = logging.getLogger(__name__)

bp = Blueprint("auth", __name__)

user_create_schema = UserCreateSchema()
user_out_schema = UserOutSchema()
user_login_schema = UserLoginSchema()


@bp.post("/auth/register")
def register():
    """
    Register a new user and open a session.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          required: [username, email, password]
          properties:
            username: { type: string }
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created (returns user, token and refreshToken)
      409:
        description: User already exists
      422:
        description: Validation error
    """
    payload = request.get_json(silent=True) or {}
    data = user_create_schema.load(payload)

    session = storage.get_session()
    if session.query(User).filter(User.email == data["email"]).first():
        abort(409, description="User already exists")
    if session.query(User).filter(User.username == data["username"]).first():
        abort(409, description="Username already taken")

    user = User(
        username=data["username"],
        email=data["email"],
        password_hash=hash_password(data["password"]),
    )
    storage.new(user)
    access_token, refresh_token = start_session(user, get_token_service())
    logger.info("Registered user %s", user.id)

    return jsonify(
        {
            "data": user_out_schema.dump(user),
            "token": access_token,
            "refreshToken": refresh_token,
        }
    ), 201


@bp.post("/auth/login")
def login():
    """
    Login: return an access token and a refresh token
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           required: [email, password]
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns user, token and refreshToken)
      401:
        description: Invalid email or password
    """
    payload = request.get_json(silent=True) or {}
    data = user_login_schema.load(payload)

    session = storage.get_session()
    user: User | None = session.query(User).filter(User.email == data["email"]).first()
    if not user or not verify_password(data["password"], user.password_hash):
        abort(401, description="Invalid email or password")

    access_token, refresh_token = start_session(user, get_token_service())

    return jsonify(
        {
            "data": user_out_schema.dump(user),
            "token": access_token,
            "refreshToken": refresh_token,
        }
    ), 200


@bp.post("/auth/refresh")
def refresh():
    """
    Exchange the current refresh token for a new access token.
    The refresh token itself is not rotated.
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           required: [refreshToken]
           properties:
             refreshToken: { type: string }
    responses:
      200:
        description: OK (returns token)
      400:
        description: Missing refresh token
      401:
        description: Invalid refresh token
    """
    payload = request.get_json(silent=True)
    # a JSON string, list or number carries no refreshToken field either
    token = payload.get("refreshToken") if isinstance(payload, dict) else None
    if not isinstance(token, str) or not token:
        abort(400, description="Missing refresh token")

    try:
        access_token = exchange_refresh_token(token, get_token_service())
    except MissingTokenError:
        abort(400, description="Missing refresh token")
    except InvalidTokenError as exc:
        logger.info("Refresh rejected: %s (%s)", exc.__class__.__name__, exc)
        abort(401, description="Invalid refresh token")

    return jsonify({"token": access_token}), 200


@bp.get("/auth/profile")
@jwt_required()
def profile():
    """
    Profile of the authenticated user
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK
      401:
        description: Unauthorized
      404:
        description: User not found
    """
    user = storage.get(User, g.current_user.id)
    if not user:
        abort(404, description="User not found")
    return jsonify({"data": user_out_schema.dump(user)}), 200
