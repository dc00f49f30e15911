"""
Auth Routes

Account creation and JWT cookie sessions.
"""

import logging

from flask import g

from climatrix.auth import auth_bp
from climatrix.auth.decorators import login_required
from climatrix.errors import Conflict, Unauthorized
from climatrix.extensions import db
from climatrix.models import Profile, User
from climatrix.responses import success_response, validate_body
from climatrix.schemas import LoginRequest, SignupRequest
from climatrix.services import auth as auth_service

logger = logging.getLogger(__name__)


@auth_bp.route('/signup', methods=['POST'])
def signup():
    """Create an account and log it in"""
    data = validate_body(SignupRequest)
    email = data.email.lower()

    if User.query.filter_by(email=email).first():
        raise Conflict('Email already registered')
    if User.query.filter_by(username=data.username).first():
        raise Conflict('Username already taken')

    user = User(
        email=email,
        username=data.username,
        password_hash=auth_service.hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        city=data.city,
        state=data.state,
        country=data.country,
        role='USER',
        profile=Profile(interests=[]),
    )
    db.session.add(user)
    db.session.commit()
    logger.info('New user registered: %s', user.username)

    response = success_response(user.to_dict(), 'Account created successfully', status=201)
    return auth_service.set_auth_cookie(response, auth_service.create_token(user))


@auth_bp.route('/login', methods=['POST'])
def login():
    """Exchange credentials for an auth cookie"""
    data = validate_body(LoginRequest)

    user = User.query.filter_by(email=data.email.lower()).first()
    if not user or not auth_service.verify_password(data.password, user.password_hash):
        raise Unauthorized('Invalid email or password')

    response = success_response(user.to_dict(), f'Welcome back, {user.username}!')
    return auth_service.set_auth_cookie(response, auth_service.create_token(user))


@auth_bp.route('/logout', methods=['POST'])
def logout():
    response = success_response(None, 'You have been logged out successfully.')
    return auth_service.clear_auth_cookie(response)


@auth_bp.route('/me')
@login_required
def me():
    identity = g.current_user
    return success_response({
        'userId': identity['userId'],
        'email': identity['email'],
        'role': identity['role'],
    })
