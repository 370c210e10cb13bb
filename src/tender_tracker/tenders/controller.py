from __future__ import annotations

import io

from flask import Blueprint, jsonify, request, send_file

from ..auth.guards import AuthContext, Guards
from ..common.datetime_utils import now_utc, parse_month
from ..common.http import error_response, internal_error, json_body
from ..container import Container
from ..core.exceptions import DomainError, ValidationError
from ..core.logging import get_logger
from .export import XLSX_MIMETYPE
from .model import to_json

logger = get_logger("tenders")


def register(api: Blueprint, container: Container, guards: Guards) -> None:
    @api.get("/tenders")
    @guards.login_required
    def list_tenders(auth: AuthContext):
        try:
            return jsonify([to_json(t) for t in container.tender_service.list_tenders()])
        except Exception:
            logger.exception("Error getting tenders")
            return internal_error()

    @api.get("/tenders/calendar")
    @guards.login_required
    def tender_calendar(auth: AuthContext):
        month_s = request.args.get("month") or now_utc().strftime("%Y-%m")
        try:
            try:
                year, month = parse_month(month_s)
            except ValueError:
                raise ValidationError(errors=[{"field": "month", "message": "Expected YYYY-MM"}])
            days = container.tender_service.calendar_month(year=year, month=month)
            return jsonify({"month": f"{year:04d}-{month:02d}", "days": days})
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error building tender calendar")
            return internal_error()

    @api.get("/tenders/summary")
    @guards.login_required
    def tender_summary(auth: AuthContext):
        try:
            summary = container.tender_service.summary()
            summary["upcoming"] = [to_json(t) for t in summary["upcoming"]]
            return jsonify(summary)
        except Exception:
            logger.exception("Error building tender summary")
            return internal_error()

    @api.get("/tenders/export")
    @guards.login_required
    def export_tenders(auth: AuthContext):
        try:
            data = container.tender_service.export_xlsx()
        except Exception:
            logger.exception("Error exporting tenders")
            return internal_error()
        return send_file(
            io.BytesIO(data),
            mimetype=XLSX_MIMETYPE,
            as_attachment=True,
            download_name=f"tenders_{now_utc().strftime('%Y%m%d')}.xlsx",
        )

    @api.get("/tenders/<tender_id>")
    @guards.login_required
    def get_tender(auth: AuthContext, tender_id: str):
        try:
            return jsonify(to_json(container.tender_service.get_tender(tender_id)))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error getting tender")
            return internal_error()

    @api.post("/tenders")
    @guards.login_required
    def create_tender(auth: AuthContext):
        try:
            tender = container.tender_service.create_tender(json_body())
            return jsonify(to_json(tender)), 201
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error creating tender")
            return internal_error()

    @api.put("/tenders/<tender_id>")
    @guards.login_required
    def update_tender(auth: AuthContext, tender_id: str):
        try:
            tender = container.tender_service.update_tender(tender_id, json_body())
            return jsonify(to_json(tender))
        except DomainError as e:
            return error_response(e)
        except Exception:
            logger.exception("Error updating tender")
            return internal_error()

    @api.delete("/tenders/<tender_id>")
    @guards.login_required
    def delete_tender(auth: AuthContext, tender_id: str):
        try:
            container.tender_service.delete_tender(tender_id)
            return jsonify({"message": "Tender deleted successfully", "id": tender_id})
        except Exception:
            logger.exception("Error deleting tender")
            return internal_error()
