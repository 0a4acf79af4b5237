from flask import Flask, request, jsonify, Blueprint, current_app, url_for, send_from_directory
from flask_jwt_extended import create_access_token, jwt_required, JWTManager, get_jwt
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.exc import SQLAlchemyError, IntegrityError
from flask_migrate import Migrate
from sqlalchemy import func, update, delete, select, or_
from flask_bcrypt import Bcrypt
from flasgger import Swagger
from flask_cors import CORS
from datetime import datetime, timezone
from decimal import Decimal
import logging
import uuid
import os
