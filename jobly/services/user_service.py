import logging
from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.orm import Session

from jobly.errors import BadRequestError, NotFoundError, UnauthorizedError
from jobly.utils.security import hash_password, verify_password
from jobly.utils.sql import bind_params, sql_for_partial_update

logger = logging.getLogger(__name__)

USER_COLUMNS = "username, first_name, last_name, email, is_admin"

COLUMN_MAP = {"firstName": "first_name", "lastName": "last_name", "isAdmin": "is_admin"}
UPDATABLE_COLUMNS = {"first_name", "last_name", "email", "password"}


def authenticate(db: Session, username: str, password: str) -> dict:
    row = db.execute(
        text(f"SELECT {USER_COLUMNS}, password FROM users WHERE username = :username"),
        {"username": username},
    ).mappings().first()

    if row is None or not verify_password(row["password"], password):
        raise UnauthorizedError("Invalid username/password")

    user = dict(row)
    del user["password"]
    return user


def register(db: Session, data: Mapping[str, Any]) -> dict:
    username = data["username"]
    duplicate = db.execute(
        text("SELECT username FROM users WHERE username = :username"),
        {"username": username},
    ).first()
    if duplicate is not None:
        raise BadRequestError(f"Duplicate username: {username}")

    row = db.execute(
        text(
            f"""
            INSERT INTO users (username, password, first_name, last_name, email, is_admin)
            VALUES (:username, :password, :first_name, :last_name, :email, :is_admin)
            RETURNING {USER_COLUMNS}
            """
        ),
        {
            "username": username,
            "password": hash_password(data["password"]),
            "first_name": data["firstName"],
            "last_name": data["lastName"],
            "email": data["email"],
            "is_admin": bool(data.get("isAdmin", False)),
        },
    ).mappings().one()
    db.commit()
    logger.info("Registered user %s", username)
    return dict(row)


def find_all(db: Session) -> list[dict]:
    rows = db.execute(text(f"SELECT {USER_COLUMNS} FROM users ORDER BY username")).mappings().all()
    return [dict(r) for r in rows]


def get(db: Session, username: str) -> dict:
    row = db.execute(
        text(f"SELECT {USER_COLUMNS} FROM users WHERE username = :username"),
        {"username": username},
    ).mappings().first()
    if row is None:
        raise NotFoundError(f"No user: {username}")
    return dict(row)


def update(db: Session, username: str, data: Mapping[str, Any]) -> dict:
    """Partial update; a new password is hashed before it is stored."""
    data = dict(data)
    if "password" in data:
        data["password"] = hash_password(data["password"])

    set_cols, values = sql_for_partial_update(data, COLUMN_MAP, UPDATABLE_COLUMNS)
    username_param = f"p{len(values) + 1}"

    row = db.execute(
        text(
            f"UPDATE users SET {set_cols} WHERE username = :{username_param} "
            f"RETURNING {USER_COLUMNS}"
        ),
        {**bind_params(values), username_param: username},
    ).mappings().first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No user: {username}")
    db.commit()
    return dict(row)


def remove(db: Session, username: str) -> None:
    row = db.execute(
        text("DELETE FROM users WHERE username = :username RETURNING username"),
        {"username": username},
    ).first()
    if row is None:
        db.rollback()
        raise NotFoundError(f"No user: {username}")
    db.commit()
    logger.info("Deleted user %s", username)
