from __future__ import annotations

from flask import Blueprint, jsonify

from ..auth.guards import AuthContext, Guards
from ..auth.sessions import destroy_session, session_user_id, start_session
from ..common.http import error_response, internal_error, json_body
from ..container import Container
from ..core.exceptions import DomainError
from ..core.logging import get_logger
from .model import sanitize

logger = get_logger("users")


def register(api: Blueprint, container: Container, guards: Guards) -> None:
    @api.post("/auth/login")
    def login():
        try:
            user = container.auth_service.authenticate(json_body())
            start_session(user.id)
            return jsonify(sanitize(user))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error during login")
            return internal_error()

    @api.post("/auth/logout")
    def logout():
        try:
            destroy_session()
        except Exception:
            logger.exception("Error destroying session")
            return jsonify({"message": "Failed to logout"}), 500
        return jsonify({"message": "Logged out successfully"})

    @api.get("/auth/me")
    def me():
        user_id = session_user_id()
        if not user_id:
            return jsonify({"message": "Not authenticated"}), 401

        try:
            user = container.auth_service.current_user(user_id)
        except Exception:
            logger.exception("Error getting current user")
            return internal_error()

        if not user:
            return jsonify({"message": "User not found"}), 401
        return jsonify(sanitize(user))

    @api.get("/admin/users")
    @guards.admin_required
    def admin_list_users(auth: AuthContext):
        try:
            return jsonify([sanitize(u) for u in container.user_service.list_users()])
        except Exception:
            logger.exception("Error getting users")
            return internal_error()

    @api.get("/admin/users/<user_id>")
    @guards.admin_required
    def admin_get_user(auth: AuthContext, user_id: str):
        try:
            return jsonify(sanitize(container.user_service.get_user(user_id)))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error getting user")
            return internal_error()

    @api.post("/admin/users")
    @guards.admin_required
    def admin_create_user(auth: AuthContext):
        try:
            user = container.user_service.create_user(json_body())
            logger.info("User %r created by %s", user.username, auth.user_id)
            return jsonify(sanitize(user)), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error creating user")
            return internal_error()

    @api.put("/admin/users/<user_id>")
    @guards.admin_required
    def admin_update_user(auth: AuthContext, user_id: str):
        try:
            user = container.user_service.update_user(user_id, json_body())
            return jsonify(sanitize(user))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error updating user")
            return internal_error()

    @api.delete("/admin/users/<user_id>")
    @guards.admin_required
    def admin_delete_user(auth: AuthContext, user_id: str):
        try:
            container.user_service.delete_user(actor_id=auth.user_id, user_id=user_id)
            return jsonify({"message": "User deleted successfully", "id": user_id})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error deleting user")
            return internal_error()
