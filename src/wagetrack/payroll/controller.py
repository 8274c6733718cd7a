from __future__ import annotations

import csv
import io
import traceback

from flask import Flask, flash, jsonify, redirect, render_template, request, url_for

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.web import current_owner_id, login_required
from ..container import Container
from ..core.exceptions import ValidationError
from .aggregator import PeriodReport
from .service import CSV_FIELDNAMES


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_report_service

    def _selected_report() -> tuple[PeriodReport, dict]:
        """Range report when ?start=&end= are given, else the ?month= (default: current) report."""

        owner_id = current_owner_id()
        start_s = request.args.get("start")
        end_s = request.args.get("end")
        if bool(start_s) != bool(end_s):
            raise ValidationError("A custom range needs both a start and an end date")
        if start_s and end_s:
            start = parse_iso_date(start_s)
            end = parse_iso_date(end_s)
            report = payroll.range_report(owner_id, start=start, end=end)
            return report, {"start": start_s, "end": end_s}

        month = request.args.get("month") or now_local().strftime("%Y-%m")
        return payroll.monthly_report(owner_id, month), {"month": month}

    @app.route("/dashboard", endpoint="dashboard")
    @login_required
    def dashboard():
        data = payroll.dashboard(current_owner_id(), now=now_local())
        return render_template("dashboard.html", data=data, active_page="dashboard")

    @app.route("/reports", endpoint="reports")
    @login_required
    def reports():
        try:
            report, params = _selected_report()
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("reports"))
        return render_template("reports.html", report=report, params=params, active_page="reports")

    @app.route("/reports.csv", endpoint="reports_csv")
    @login_required
    def reports_csv():
        try:
            report, params = _selected_report()
        except ValidationError as e:
            flash(str(e), "warning")
            return redirect(url_for("reports"))

        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=CSV_FIELDNAMES)
        writer.writeheader()
        for row in payroll.csv_rows(report):
            writer.writerow(row)

        label = params.get("month") or f"{params['start']}_{params['end']}"
        csv_bytes = out.getvalue().encode("utf-8-sig")
        return app.response_class(
            csv_bytes,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename=payroll_{label}.csv"},
        )

    @app.route("/api/dashboard", endpoint="api_dashboard")
    @login_required
    def api_dashboard():
        try:
            data = payroll.dashboard(current_owner_id(), now=now_local())
            return jsonify({"success": True, **payroll.dashboard_to_dict(data)})
        except Exception:
            traceback.print_exc()
            return jsonify({"success": False, "message": "System error while building the dashboard"}), 500

    @app.route("/api/reports", endpoint="api_reports")
    @login_required
    def api_reports():
        try:
            report, _ = _selected_report()
            return jsonify({"success": True, **payroll.report_to_dict(report)})
        except ValidationError as e:
            return jsonify({"success": False, "message": str(e)}), 400
        except Exception:
            traceback.print_exc()
            return jsonify({"success": False, "message": "System error while building the report"}), 500
