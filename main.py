from core.imports import Flask, send_from_directory, logging, current_app
from core.config import Config
from core.errors import register_error_handlers
from core.extensions import db, jwt, swagger, cors, bcrypt, migrate
from routes.users import users_bp, seed_demo_vendor, seed_demo_buyer
from routes.admin import admin_bp, seed_admin_account
from routes.products import products_bp, seed_products
from routes.orders import orders_bp
from routes.vendors import vendors_bp


def configure_logging(app):
    level = getattr(logging, str(app.config.get("LOG_LEVEL", "INFO")).upper(), logging.INFO)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s [%(name)s] %(message)s")
    logging.getLogger().setLevel(level)
    app.logger.setLevel(level)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    configure_logging(app)

    db.init_app(app)
    jwt.init_app(app)
    swagger.init_app(app)
    cors.init_app(app, resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}})
    bcrypt.init_app(app)
    migrate.init_app(app, db)

    app.register_blueprint(users_bp)
    app.register_blueprint(vendors_bp)
    app.register_blueprint(products_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(admin_bp)
    register_error_handlers(app)

    @app.route("/ping")
    def ping():
        return "Ping received", 200

    @app.route("/uploads/<path:filename>")
    def uploaded_file(filename):
        return send_from_directory(current_app.config["UPLOAD_FOLDER"], filename)

    @app.cli.command("seed")
    def seed_command():
        """Create tables and demo accounts, products and the admin."""
        db.create_all()
        seed_all()

    app.logger.info("Marketplace API configured (%s)", config_object.__name__)
    return app


def seed_all():
    seed_admin_account()
    seed_demo_vendor()
    seed_demo_buyer()
    seed_products()


if __name__ == "__main__":
    app = create_app()
    with app.app_context():
        db.create_all()
        seed_all()

    app.run(debug=True)
