import logging

from flask import Flask, render_template
from sqlalchemy.exc import DBAPIError

from .extensions import csrf, db, login_manager, migrate
from .errors import AppError, RemoteUnavailable


def create_app(config_object="config.Config"):
    """App factory: extensions, the access gate, blueprints and error pages."""
    app = Flask(__name__)
    app.config.from_object(config_object)
    app.logger.setLevel(getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO))

    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    login_manager.login_view = "auth.login"
    csrf.init_app(app)

    @login_manager.user_loader
    def load_user(user_id):
        from .models.user import User
        try:
            return db.session.get(User, int(user_id))
        except ValueError:
            return None
        except DBAPIError as e:
            db.session.rollback()
            app.logger.exception("could not load user %s", user_id)
            raise RemoteUnavailable() from e

    from .session import open_session
    from .access import enforce_route_rules
    # order matters: the gate reads the session built by open_session
    app.before_request(open_session)
    app.before_request(enforce_route_rules)

    @app.context_processor
    def inject_session():
        from .session import get_session
        return {"session_ctx": get_session()}

    from .blueprints.public import bp as public_bp
    from .blueprints.auth import bp as auth_bp
    from .blueprints.dashboard import bp as dashboard_bp
    from .blueprints.admin import bp as admin_bp
    from .blueprints.organization import bp as organization_bp
    from .blueprints.interviewer import bp as interviewer_bp
    from .blueprints.candidate import bp as candidate_bp

    app.register_blueprint(public_bp)
    app.register_blueprint(auth_bp, url_prefix="/auth")
    app.register_blueprint(dashboard_bp, url_prefix="/dashboard")
    app.register_blueprint(admin_bp, url_prefix="/dashboard/admin")
    app.register_blueprint(organization_bp, url_prefix="/organization")
    app.register_blueprint(interviewer_bp, url_prefix="/interviewer")
    app.register_blueprint(candidate_bp)

    @app.errorhandler(AppError)
    def handle_app_error(e):
        db.session.rollback()
        if isinstance(e, RemoteUnavailable):
            app.logger.warning("request failed, store unavailable")
        return render_template("error.html", message=e.message, status=e.http_status), e.http_status

    @app.errorhandler(404)
    def not_found(e):
        return render_template("error.html", message="Page not found", status=404), 404

    return app
