"""Tests for the contact form and the site-level endpoints"""
from sqlalchemy import func, select

import db
from models import ContactMessage


def _message_count():
    with db.get_connection() as conn:
        return conn.execute(select(func.count()).select_from(ContactMessage.__table__)).scalar_one()


def test_index(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.get_data(as_text=True) == "Flask server running for Louvre & Latte."
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_health(client):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json()["database"] == "reachable"


def test_submit_contact_stores_and_redirects(client):
    resp = client.post("/submit-contact", data={
        "name": "Camille",
        "email": "camille@louvre-latte.com",
        "message": "Do you take reservations for ten?",
    })

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/?status=success#contact")

    with db.get_connection() as conn:
        row = conn.execute(select(ContactMessage.__table__)).mappings().one()
    assert row["name"] == "Camille"
    assert row["email"] == "camille@louvre-latte.com"
    assert row["created_at"] is not None


def test_submit_contact_invalid_email(client):
    resp = client.post("/submit-contact", data={
        "name": "Camille",
        "email": "not-an-email",
        "message": "Hello",
    })

    assert resp.status_code == 302
    assert resp.headers["Location"].endswith("/?status=invalid#contact")
    assert _message_count() == 0


def test_submit_contact_missing_message(client):
    resp = client.post("/submit-contact", data={"name": "Camille", "email": "camille@louvre-latte.com"})

    assert resp.headers["Location"].endswith("/?status=invalid#contact")
    assert _message_count() == 0


def test_submit_contact_database_failure(client, engine):
    ContactMessage.__table__.drop(engine)

    resp = client.post("/submit-contact", data={
        "name": "Camille",
        "email": "camille@louvre-latte.com",
        "message": "Hello",
    })

    assert resp.status_code == 500
    assert resp.get_data(as_text=True) == "Form submission failed due to a server error."


def test_unknown_route_is_json(client):
    resp = client.get("/nope")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False
