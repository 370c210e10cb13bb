from __future__ import annotations

from .connection import db


class UserRow(db.Model):
    __tablename__ = "users"

    id = db.Column(db.String(36), primary_key=True)
    username = db.Column(db.String(255), unique=True, nullable=False)
    password = db.Column(db.String(255), nullable=False)
    is_admin = db.Column(db.Boolean, nullable=False, default=False)


class TenderRow(db.Model):
    __tablename__ = "tenders"

    id = db.Column(db.String(36), primary_key=True)
    tender_number = db.Column(db.String(255), unique=True, nullable=False)
    client_name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=False)
    # Naive UTC
    briefing_date = db.Column(db.DateTime, nullable=False)
    submission_date = db.Column(db.DateTime, nullable=False, index=True)
    venue = db.Column(db.String(255), nullable=False, default="")
    compulsory_briefing = db.Column(db.Boolean, nullable=False, default=False)


class SessionRow(db.Model):
    __tablename__ = "sessions"

    sid = db.Column(db.String(128), primary_key=True)
    data = db.Column(db.Text, nullable=False)
    expires_at = db.Column(db.DateTime, nullable=False, index=True)
