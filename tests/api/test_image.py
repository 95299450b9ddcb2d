"""
Tests for the read-only image endpoints.
"""


class TestImages:
    """Tests for GET /api/images and GET /api/images/{id}."""

    def test_list_pages(self, client, create_product):
        """Test images are paged like every other list."""
        create_product("REF-1", images=3)

        first = client.get("/api/images?page=1&limit=2")
        second = client.get("/api/images?page=2&limit=2")

        assert first.status_code == 200
        assert [row["name"] for row in first.json()] == ["imgREF-1_0.jpg", "imgREF-1_1.jpg"]
        assert [row["name"] for row in second.json()] == ["imgREF-1_2.jpg"]
        assert client.get("/api/images?page=3&limit=2").status_code == 404

    def test_detail_names_product(self, client, create_product):
        """Test an image shows the product it belongs to."""
        product = create_product("REF-1", name="iPhone 1", images=1)
        image_id = product.images[0].id

        response = client.get(f"/api/images/{image_id}")

        assert response.status_code == 200
        assert response.json()["product"] == {
            "id": product.id,
            "reference": "REF-1",
            "name": "iPhone 1",
        }

    def test_unknown_image(self, client, engine):
        """Test an unknown id is a 404."""
        response = client.get("/api/images/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Image not found"

    def test_no_write_routes(self, client, super_admin_headers):
        """Test images cannot be created through the API."""
        response = client.post(
            "/api/images", json={"name": "x.jpg"}, headers=super_admin_headers
        )

        assert response.status_code == 405
