"""
Tests for the customer endpoints in bilemo/api/customer.py.
"""

from bilemo.persistence.models import Customer, CustomerUser, User
from bilemo.utils.password_hash import verify_password

CUSTOMER_PAYLOAD = {
    "company": "Phone House",
    "last_name": "Moreau",
    "first_name": "Emma",
    "postal_code": "33000",
    "address": "5 rue du Port",
    "city": "Bordeaux",
    "country": "France",
    "phone": "0556000000",
    "user": {"email": "contact@phonehouse.fr", "password": "secret"},
}


class TestCustomerAccess:
    """Role checks on /api/customers."""

    def test_client_cannot_list(self, client, client1_headers):
        """Test customer accounts cannot browse customers."""
        response = client.get("/api/customers", headers=client1_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == (
            "You do not have sufficient rights to manage customers."
        )

    def test_anonymous_cannot_list(self, client, engine):
        """Test a token is required."""
        assert client.get("/api/customers").status_code in (401, 403)

    def test_admin_lists(self, client, admin_headers, create_customer):
        """Test admins see customers in the list group."""
        create_customer(1, "Alpha")
        create_customer(2, "Beta")
        create_customer(3, "Gamma")

        response = client.get("/api/customers?page=2&limit=2", headers=admin_headers)

        assert response.status_code == 200
        rows = response.json()
        assert [row["company"] for row in rows] == ["Gamma"]
        assert set(rows[0].keys()) == {"id", "company", "last_name", "first_name", "phone"}


class TestCustomerDetail:
    """Tests for GET /api/customers/{id}."""

    def test_detail_hides_password(
        self, client, admin_headers, customer1, create_customer_user
    ):
        """Test the detail shows users and roles but never the hash."""
        create_customer_user(customer1, "Martin")

        response = client.get(f"/api/customers/{customer1.id}", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["user"] == {"email": "customer1@gmail.com", "roles": ["ROLE_CLIENT"]}
        assert [cu["last_name"] for cu in body["customer_users"]] == ["Martin"]
        assert "hashed_password" not in str(body)
        assert "password" not in body["user"]

    def test_unknown_customer(self, client, admin_headers):
        """Test an unknown id is a 404."""
        response = client.get("/api/customers/999", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Customer not found"


class TestCreateCustomer:
    """Tests for POST /api/customers."""

    def test_admin_creates_with_client_account(self, client, admin_headers, session):
        """Test the login account gets ROLE_CLIENT and a hashed password."""
        response = client.post(
            "/api/customers", json=CUSTOMER_PAYLOAD, headers=admin_headers
        )

        assert response.status_code == 201
        body = response.json()
        assert body["address"] == "5 rue du Port"
        assert body["user"]["roles"] == ["ROLE_CLIENT"]
        assert response.headers["location"].endswith(f"/api/customers/{body['id']}")

        user = session.query(User).filter(User.email == "contact@phonehouse.fr").one()
        assert user.hashed_password != "secret"
        assert verify_password(user.hashed_password, "secret")

    def test_new_customer_can_log_in(self, client, admin_headers):
        """Test the created account works with login_check."""
        client.post("/api/customers", json=CUSTOMER_PAYLOAD, headers=admin_headers)

        response = client.post(
            "/api/login_check",
            json={"username": "contact@phonehouse.fr", "password": "secret"},
        )

        assert response.status_code == 200

    def test_length_rules(self, client, admin_headers, session):
        """Test short names, postal codes and passwords are refused."""
        payload = dict(
            CUSTOMER_PAYLOAD,
            last_name="Li",
            postal_code="123",
            user={"email": "bad", "password": "abc"},
        )

        response = client.post("/api/customers", json=payload, headers=admin_headers)

        assert response.status_code == 400
        messages = response.json()
        assert "last_name must be at least 3 characters long." in messages
        assert "postal_code must be at least 5 characters long." in messages
        assert "user.password must be at least 4 characters long." in messages
        assert any(message.startswith("user.email") for message in messages)
        assert session.query(Customer).count() == 0

    def test_duplicate_email(self, client, admin_headers, customer1, session):
        """Test an email already used by an account is refused."""
        payload = dict(
            CUSTOMER_PAYLOAD,
            user={"email": "customer1@gmail.com", "password": "secret"},
        )

        response = client.post("/api/customers", json=payload, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == [
            "This email address is already in use, please choose another one."
        ]
        assert session.query(Customer).count() == 1

    def test_missing_user(self, client, admin_headers):
        """Test the nested account is required."""
        payload = {k: v for k, v in CUSTOMER_PAYLOAD.items() if k != "user"}

        response = client.post("/api/customers", json=payload, headers=admin_headers)

        assert response.status_code == 400
        assert response.json() == ["user: this value should not be blank."]


class TestUpdateCustomer:
    """Tests for PUT /api/customers/{id}."""

    def test_merge_keeps_omitted_fields(self, client, admin_headers, customer1):
        """Test only the sent fields change."""
        response = client.put(
            f"/api/customers/{customer1.id}",
            json={"city": "Nantes", "tva_number": ""},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["city"] == "Nantes"
        assert body["tva_number"] == ""
        assert body["company"] == "Company 1"

    def test_same_password_keeps_hash(self, client, admin_headers, customer1, session):
        """Test resending the current password does not rehash it."""
        before = customer1.user.hashed_password

        response = client.put(
            f"/api/customers/{customer1.id}",
            json={"user": {"password": "password1"}},
            headers=admin_headers,
        )

        assert response.status_code == 200
        session.expire_all()
        assert session.get(User, customer1.user.id).hashed_password == before

    def test_new_password_is_hashed(self, client, admin_headers, customer1, session):
        """Test a different password replaces the hash."""
        response = client.put(
            f"/api/customers/{customer1.id}",
            json={"user": {"password": "changed"}},
            headers=admin_headers,
        )

        assert response.status_code == 200
        session.expire_all()
        user = session.query(User).filter(User.email == "customer1@gmail.com").one()
        assert verify_password(user.hashed_password, "changed")
        assert not verify_password(user.hashed_password, "password1")

    def test_email_taken_by_other_account(
        self, client, admin_headers, customer1, customer2
    ):
        """Test moving to another account's email is refused."""
        response = client.put(
            f"/api/customers/{customer1.id}",
            json={"user": {"email": "customer2@gmail.com"}},
            headers=admin_headers,
        )

        assert response.status_code == 400

    def test_cannot_blank_company(self, client, admin_headers, customer1):
        """Test a required field cannot be emptied."""
        response = client.put(
            f"/api/customers/{customer1.id}",
            json={"company": ""},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json() == ["company: this value should not be blank."]


class TestDeleteCustomer:
    """Tests for DELETE /api/customers/{id}."""

    def test_admin_cannot_delete(self, client, admin_headers, customer1):
        """Test deletion needs a super admin."""
        response = client.delete(f"/api/customers/{customer1.id}", headers=admin_headers)

        assert response.status_code == 403

    def test_cascade(
        self, client, super_admin_headers, customer1, create_customer_user, session
    ):
        """Test the account and customer users go with the customer."""
        create_customer_user(customer1, "Martin")
        create_customer_user(customer1, "Petit")
        assert len(client.get("/api/customer-users", headers=super_admin_headers).json()) == 2

        response = client.delete(
            f"/api/customers/{customer1.id}", headers=super_admin_headers
        )

        assert response.status_code == 204
        session.expire_all()
        assert session.query(Customer).count() == 0
        assert session.query(CustomerUser).count() == 0
        assert session.query(User).filter(User.email == "customer1@gmail.com").count() == 0
        # Cached customer user pages were dropped with the rows
        assert client.get("/api/customer-users", headers=super_admin_headers).status_code == 404


class TestCustomerRoundTrip:
    """A customer read back holds exactly what was sent."""

    def test_every_field_comes_back(self, client, admin_headers):
        """Test each sent field comes back and the password never does."""
        payload = dict(
            CUSTOMER_PAYLOAD, tva_number="FR12345678901", siret="12345678900011"
        )
        created = client.post("/api/customers", json=payload, headers=admin_headers)
        assert created.status_code == 201

        response = client.get(
            f"/api/customers/{created.json()['id']}", headers=admin_headers
        )
        body = response.json()

        sent = {field: value for field, value in payload.items() if field != "user"}
        assert {field: body[field] for field in sent} == sent
        assert body["user"] == {
            "email": "contact@phonehouse.fr",
            "roles": ["ROLE_CLIENT"],
        }
        assert body["customer_users"] == []
        assert "password" not in response.text
        assert "hashed_password" not in response.text
