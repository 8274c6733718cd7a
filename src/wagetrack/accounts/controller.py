from __future__ import annotations

import traceback

from flask import Flask, flash, redirect, render_template, request, session, url_for

from ..container import Container
from ..core.exceptions import AuthenticationError, ValidationError
from .service import SessionAccount


def register(app: Flask, container: Container) -> None:
    def _start_session(account: SessionAccount, *, remember: bool) -> None:
        session.clear()
        session.permanent = remember
        session["account_id"] = account.account_id
        session["email"] = account.email

    @app.route("/", methods=["GET", "POST"], endpoint="login")
    def login():
        if "account_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            email = request.form.get("email", "")
            password = request.form.get("password", "")

            try:
                account = container.auth_service.authenticate(email, password)
                _start_session(account, remember=bool(request.form.get("remember_me")))
                flash("Signed in.", "success")
                return redirect(url_for("dashboard"))
            except AuthenticationError as e:
                flash(str(e), "danger")
            except Exception as e:
                traceback.print_exc()
                if bool(app.config.get("DEBUG", False)):
                    flash(f"System error while signing in: {e}", "danger")
                else:
                    flash("System error while signing in", "danger")

        return render_template("login.html")

    @app.route("/register", methods=["GET", "POST"], endpoint="register")
    def register_account():
        if "account_id" in session:
            return redirect(url_for("dashboard"))

        if request.method == "POST":
            try:
                account = container.auth_service.register(
                    request.form.get("email", ""),
                    request.form.get("password", ""),
                )
                _start_session(account, remember=False)
                flash("Account created.", "success")
                return redirect(url_for("dashboard"))
            except ValidationError as e:
                flash(str(e), "danger")
            except Exception:
                traceback.print_exc()
                flash("System error while creating the account", "danger")

        return render_template("register.html")

    @app.route("/logout", endpoint="logout")
    def logout():
        session.clear()
        flash("Signed out.", "info")
        return redirect(url_for("login"))
