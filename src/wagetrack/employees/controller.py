from __future__ import annotations

import traceback

from flask import Flask, flash, redirect, render_template, request, url_for

from ..common.web import current_owner_id, login_required
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/employees", endpoint="employees")
    @login_required
    def employees():
        search = request.args.get("q", "")
        rows = container.employee_service.list_employees(current_owner_id(), search=search)
        return render_template("employees.html", employees=rows, search=search, active_page="employees")

    @app.route("/employees/create", methods=["POST"], endpoint="create_employee")
    @login_required
    def create_employee():
        try:
            container.employee_service.create_employee(
                current_owner_id(),
                name=request.form.get("name", ""),
                hourly_rate=request.form.get("hourly_rate", ""),
            )
            flash("Employee added.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            traceback.print_exc()
            flash("System error while adding the employee", "danger")
        return redirect(url_for("employees"))

    @app.route("/employees/<int:employee_id>/update", methods=["POST"], endpoint="update_employee")
    @login_required
    def update_employee(employee_id: int):
        try:
            container.employee_service.update_employee(
                current_owner_id(),
                employee_id,
                name=request.form.get("name", ""),
                hourly_rate=request.form.get("hourly_rate", ""),
            )
            flash("Employee updated.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            traceback.print_exc()
            flash("System error while updating the employee", "danger")
        return redirect(url_for("employees"))

    @app.route("/employees/<int:employee_id>/delete", methods=["POST"], endpoint="delete_employee")
    @login_required
    def delete_employee(employee_id: int):
        try:
            container.employee_service.delete_employee(current_owner_id(), employee_id)
            flash("Employee and their attendance records deleted.", "success")
        except ValidationError as e:
            flash(str(e), "warning")
        except Exception:
            traceback.print_exc()
            flash("System error while deleting the employee", "danger")
        return redirect(url_for("employees"))
