from hotel_console.models.role import Role


class TestHotels:
    """Tests for /api/hotels"""

    def test_create_and_list(self, client, auth_headers):
        response = client.post(
            "/api/hotels", headers=auth_headers, json={"name": "Harbour View", "city": "Galle"}
        )

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Harbour View"
        assert data["city"] == "Galle"

        listed = client.get("/api/hotels", headers=auth_headers).json()
        assert [hotel["id"] for hotel in listed] == [data["id"]]

    def test_get_unknown_hotel(self, client, auth_headers):
        response = client.get("/api/hotels/999", headers=auth_headers)
        assert response.status_code == 404


class TestRoles:
    """Tests for /api/hotels/{hotel_id}/roles"""

    def test_create_role(self, client, auth_headers, hotel):
        response = client.post(
            f"/api/hotels/{hotel.id}/roles", headers=auth_headers, json={"name": "Front Desk"}
        )

        assert response.status_code == 201
        assert response.json()["name"] == "Front Desk"
        assert response.json()["hotel_id"] == hotel.id

    def test_duplicate_name_in_same_hotel_rejected(self, client, auth_headers, hotel, manager_role):
        response = client.post(
            f"/api/hotels/{hotel.id}/roles", headers=auth_headers, json={"name": "Manager"}
        )

        assert response.status_code == 400
        assert "already exists" in response.json()["detail"]

    def test_surrounding_whitespace_does_not_bypass_uniqueness(
        self, client, auth_headers, hotel, manager_role
    ):
        response = client.post(
            f"/api/hotels/{hotel.id}/roles", headers=auth_headers, json={"name": "  Manager "}
        )
        assert response.status_code == 400

    def test_same_name_in_other_hotel_allowed(
        self, client, auth_headers, manager_role, other_hotel
    ):
        response = client.post(
            f"/api/hotels/{other_hotel.id}/roles", headers=auth_headers, json={"name": "Manager"}
        )
        assert response.status_code == 201

    def test_list_roles_only_for_hotel(
        self, client, auth_headers, hotel, manager_role, clerk_role, other_hotel, db_session
    ):
        db_session.add(Role(hotel_id=other_hotel.id, name="Chef"))
        db_session.commit()

        response = client.get(f"/api/hotels/{hotel.id}/roles", headers=auth_headers)

        assert response.status_code == 200
        assert [role["name"] for role in response.json()] == ["Clerk", "Manager"]

    def test_rename_role(self, client, auth_headers, hotel, manager_role):
        response = client.patch(
            f"/api/hotels/{hotel.id}/roles/{manager_role.id}",
            headers=auth_headers,
            json={"name": "General Manager"},
        )

        assert response.status_code == 200
        assert response.json()["name"] == "General Manager"

    def test_rename_to_taken_name_rejected(
        self, client, auth_headers, hotel, manager_role, clerk_role
    ):
        response = client.patch(
            f"/api/hotels/{hotel.id}/roles/{clerk_role.id}",
            headers=auth_headers,
            json={"name": "Manager"},
        )
        assert response.status_code == 400

    def test_role_of_other_hotel_not_found(self, client, auth_headers, manager_role, other_hotel):
        response = client.delete(
            f"/api/hotels/{other_hotel.id}/roles/{manager_role.id}", headers=auth_headers
        )
        assert response.status_code == 404

    def test_delete_role(self, client, auth_headers, hotel, manager_role):
        response = client.delete(
            f"/api/hotels/{hotel.id}/roles/{manager_role.id}", headers=auth_headers
        )

        assert response.status_code == 204
        assert client.get(f"/api/hotels/{hotel.id}/roles", headers=auth_headers).json() == []


class TestUsers:
    """Tests for /api/hotels/{hotel_id}/users"""

    def test_create_user_with_roles(self, client, auth_headers, hotel, manager_role, clerk_role):
        response = client.post(
            f"/api/hotels/{hotel.id}/users",
            headers=auth_headers,
            json={
                "first_name": "Amaya",
                "last_name": "Silva",
                "email": "amaya@harbourview.test",
                "role_ids": [manager_role.id, clerk_role.id],
            },
        )

        assert response.status_code == 201
        assert sorted(response.json()["role_ids"]) == sorted([manager_role.id, clerk_role.id])

    def test_create_user_without_roles(self, client, auth_headers, hotel):
        response = client.post(
            f"/api/hotels/{hotel.id}/users",
            headers=auth_headers,
            json={"first_name": "Kasun", "last_name": "Fernando", "email": "kasun@hv.test"},
        )

        assert response.status_code == 201
        assert response.json()["role_ids"] == []

    def test_role_from_other_hotel_rejected(
        self, client, auth_headers, hotel, other_hotel, db_session
    ):
        foreign = Role(hotel_id=other_hotel.id, name="Chef")
        db_session.add(foreign)
        db_session.commit()

        response = client.post(
            f"/api/hotels/{hotel.id}/users",
            headers=auth_headers,
            json={
                "first_name": "Kasun",
                "last_name": "Fernando",
                "email": "kasun@hv.test",
                "role_ids": [foreign.id],
            },
        )

        assert response.status_code == 400
        assert str(foreign.id) in response.json()["detail"]

    def test_replace_roles(self, client, auth_headers, hotel, staff_user, clerk_role):
        response = client.put(
            f"/api/hotels/{hotel.id}/users/{staff_user.id}/roles",
            headers=auth_headers,
            json={"role_ids": [clerk_role.id]},
        )

        assert response.status_code == 200
        assert response.json()["role_ids"] == [clerk_role.id]

    def test_user_of_other_hotel_not_found(self, client, auth_headers, staff_user, other_hotel):
        response = client.get(
            f"/api/hotels/{other_hotel.id}/users/{staff_user.id}", headers=auth_headers
        )
        assert response.status_code == 404
