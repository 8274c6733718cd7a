from __future__ import annotations

import traceback

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.datetime_utils import now_local
from ..common.web import current_owner_id, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    def _shift_form() -> dict:
        return {
            "employee_id": request.form.get("employee_id", ""),
            "work_date": request.form.get("date", ""),
            "time_in": request.form.get("time_in", ""),
            "time_out": request.form.get("time_out") or None,
        }

    @app.route("/attendance", endpoint="attendance")
    @login_required
    def attendance():
        owner_id = current_owner_id()
        return render_template(
            "attendance.html",
            employees=container.employee_service.list_employees(owner_id),
            rows=container.attendance_service.list_recent_ui(owner_id),
            today=now_local().date().strftime("%Y-%m-%d"),
            active_page="attendance",
        )

    @app.route("/attendance/create", methods=["POST"], endpoint="create_attendance")
    @login_required
    def create_attendance():
        try:
            container.attendance_service.log_shift(current_owner_id(), **_shift_form())
            flash("Shift logged.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            traceback.print_exc()
            flash("System error while logging the shift", "danger")
        return redirect(url_for("attendance"))

    @app.route("/attendance/<int:attendance_id>/update", methods=["POST"], endpoint="update_attendance")
    @login_required
    def update_attendance(attendance_id: int):
        try:
            container.attendance_service.update_shift(current_owner_id(), attendance_id, **_shift_form())
            flash("Shift updated.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            traceback.print_exc()
            flash("System error while updating the shift", "danger")
        return redirect(url_for("attendance"))

    @app.route("/attendance/<int:attendance_id>/clock-out", methods=["POST"], endpoint="clock_out")
    @login_required
    def clock_out(attendance_id: int):
        time_out = request.form.get("time_out") or now_local().strftime("%H:%M")
        try:
            container.attendance_service.clock_out(current_owner_id(), attendance_id, time_out=time_out)
            flash("Shift closed.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            traceback.print_exc()
            flash("System error while closing the shift", "danger")
        return redirect(url_for("attendance"))

    @app.route("/attendance/<int:attendance_id>/delete", methods=["POST"], endpoint="delete_attendance")
    @login_required
    def delete_attendance(attendance_id: int):
        try:
            container.attendance_service.delete_shift(current_owner_id(), attendance_id)
            flash("Shift deleted.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            traceback.print_exc()
            flash("System error while deleting the shift", "danger")
        return redirect(url_for("attendance"))
