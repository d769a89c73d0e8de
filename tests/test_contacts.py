from fastapi import status

from contacts_api import crud, models
from contacts_api.schemas import AddressCreate, ContactCreate


def test_create_contact(client, test_user, auth_headers):
    response = client.post(
        "/api/contacts",
        json={
            "first_name": "Eko",
            "last_name": "Khannedy",
            "email": "eko@pzn.com",
            "phone": "03232323",
        },
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["id"] > 0
    assert data["first_name"] == "Eko"
    assert data["last_name"] == "Khannedy"
    assert data["email"] == "eko@pzn.com"
    assert data["phone"] == "03232323"


def test_create_contact_only_first_name(client, test_user, auth_headers):
    response = client.post(
        "/api/contacts", json={"first_name": "Eko"}, headers=auth_headers
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["last_name"] is None
    assert data["email"] is None


def test_create_contact_failed(client, test_user, auth_headers):
    response = client.post(
        "/api/contacts",
        json={"first_name": "", "email": "eko", "phone": "0" * 21},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {
        "errors": {
            "first_name": ["The first_name field is required."],
            "email": ["The email field must be a valid email address."],
            "phone": ["The phone field must not be greater than 20 characters."],
        }
    }


def test_create_contact_unauthorized(client, test_user):
    response = client.post(
        "/api/contacts", json={"first_name": "Eko"}, headers={"Authorization": "salah"}
    )
    assert response.status_code == status.HTTP_401_UNAUTHORIZED
    assert response.json() == {"errors": {"message": ["unathorized"]}}


def test_get_contact(client, test_contact, auth_headers):
    response = client.get(f"/api/contacts/{test_contact.id}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {
        "data": {
            "id": test_contact.id,
            "first_name": "test",
            "last_name": "test",
            "email": "test@example.com",
            "phone": "111111",
        }
    }


def test_get_contact_not_found(client, test_contact, auth_headers):
    response = client.get(f"/api/contacts/{test_contact.id + 1}", headers=auth_headers)
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"errors": {"message": ["not found"]}}


def test_get_other_user_contact(client, test_contact, other_user):
    response = client.get(
        f"/api/contacts/{test_contact.id}", headers={"Authorization": "test2"}
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"errors": {"message": ["not found"]}}


def test_update_contact(client, db_session, test_contact, auth_headers):
    response = client.put(
        f"/api/contacts/{test_contact.id}",
        json={"first_name": "test2", "last_name": "test2", "email": "test2@example.com"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    assert data["first_name"] == "test2"
    assert data["email"] == "test2@example.com"
    # full replacement clears omitted optional fields
    assert data["phone"] is None


def test_update_contact_validation_error(client, db_session, test_contact, auth_headers):
    response = client.put(
        f"/api/contacts/{test_contact.id}",
        json={"first_name": "", "last_name": "changed"},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {
        "errors": {"first_name": ["The first_name field is required."]}
    }
    db_session.refresh(test_contact)
    assert test_contact.last_name == "test"


def test_update_other_user_contact(client, db_session, test_contact, other_user):
    response = client.put(
        f"/api/contacts/{test_contact.id}",
        json={"first_name": "hijacked"},
        headers={"Authorization": "test2"},
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    db_session.refresh(test_contact)
    assert test_contact.first_name == "test"


def test_delete_contact(client, db_session, test_contact, auth_headers):
    contact_id = test_contact.id
    crud.create_address(db_session, AddressCreate(country="Indonesia"), test_contact)

    response = client.delete(f"/api/contacts/{contact_id}", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"data": [True]}

    assert db_session.get(models.Contact, contact_id) is None
    remaining = (
        db_session.query(models.Address)
        .filter(models.Address.contact_id == contact_id)
        .count()
    )
    assert remaining == 0

    again = client.delete(f"/api/contacts/{contact_id}", headers=auth_headers)
    assert again.status_code == status.HTTP_404_NOT_FOUND


def test_delete_other_user_contact(client, db_session, test_contact, other_user):
    response = client.delete(
        f"/api/contacts/{test_contact.id}", headers={"Authorization": "test2"}
    )
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert db_session.get(models.Contact, test_contact.id) is not None


def seed_contacts(db_session, user, count=20):
    for i in range(count):
        crud.create_contact(
            db_session,
            ContactCreate(
                first_name=f"first {i}",
                last_name=f"last {i}",
                email=f"test{i}@example.com",
                phone=f"11111{i}",
            ),
            user,
        )


def test_search_by_first_name(client, db_session, test_user, auth_headers):
    seed_contacts(db_session, test_user)
    response = client.get("/api/contacts?name=first", headers=auth_headers)
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert len(body["data"]) == 10
    assert body["meta"] == {
        "current_page": 1,
        "per_page": 10,
        "last_page": 2,
        "total": 20,
    }


def test_search_by_last_name(client, db_session, test_user, auth_headers):
    seed_contacts(db_session, test_user)
    response = client.get("/api/contacts?name=LAST 1", headers=auth_headers)
    body = response.json()
    # "last 1" and "last 10".."last 19"
    assert body["meta"]["total"] == 11


def test_search_by_email_and_phone(client, db_session, test_user, auth_headers):
    seed_contacts(db_session, test_user)
    response = client.get(
        "/api/contacts?email=test5@&phone=111115", headers=auth_headers
    )
    body = response.json()
    assert body["meta"]["total"] == 1
    assert body["data"][0]["first_name"] == "first 5"


def test_search_not_found(client, db_session, test_user, auth_headers):
    seed_contacts(db_session, test_user)
    response = client.get("/api/contacts?name=nobody", headers=auth_headers)
    body = response.json()
    assert body["data"] == []
    assert body["meta"]["total"] == 0
    assert body["meta"]["last_page"] == 1


def test_search_with_page(client, db_session, test_user, auth_headers):
    seed_contacts(db_session, test_user)
    response = client.get("/api/contacts?size=5&page=2", headers=auth_headers)
    body = response.json()
    assert [c["first_name"] for c in body["data"]] == [
        "first 5",
        "first 6",
        "first 7",
        "first 8",
        "first 9",
    ]
    assert body["meta"]["current_page"] == 2
    assert body["meta"]["last_page"] == 4


def test_search_invalid_page(client, test_user, auth_headers):
    response = client.get("/api/contacts?page=0", headers=auth_headers)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {"errors": {"page": ["The page field must be at least 1."]}}


def test_search_only_own_contacts(client, db_session, test_user, other_user, auth_headers):
    seed_contacts(db_session, test_user, count=3)
    seed_contacts(db_session, other_user, count=4)
    response = client.get("/api/contacts", headers=auth_headers)
    assert response.json()["meta"]["total"] == 3


def test_create_contact_blank_optional_fields(client, test_user, auth_headers):
    response = client.post(
        "/api/contacts",
        json={"first_name": "Eko", "last_name": "", "email": "", "phone": ""},
        headers=auth_headers,
    )
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()["data"]
    assert data["first_name"] == "Eko"
    assert data["last_name"] is None
    assert data["email"] is None
    assert data["phone"] is None
