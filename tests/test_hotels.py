"""Tests for hotel search and sorting."""


class TestHotelListing:

    def test_default_sort_by_distance(self, client, make_hotel):
        far = make_hotel(name="Far", distance_from_center=5.0)
        near = make_hotel(name="Near", distance_from_center=0.5)
        response = client.get("/api/hotels")
        assert response.status_code == 200
        assert [h["id"] for h in response.json()] == [near.id, far.id]

    def test_sort_by_price_and_rating(self, client, make_hotel):
        make_hotel(name="Pricey", price_per_night_min=90000, rating=4.9)
        make_hotel(name="Cheap", price_per_night_min=15000, rating=3.5)
        make_hotel(name="Unrated", price_per_night_min=40000, rating=None)

        by_price = [h["name"] for h in client.get("/api/hotels?sortBy=price").json()]
        assert by_price == ["Cheap", "Unrated", "Pricey"]
        by_rating = [h["name"] for h in client.get("/api/hotels?sortBy=rating").json()]
        assert by_rating == ["Pricey", "Cheap", "Unrated"]

    def test_filters(self, client, make_hotel):
        make_hotel(name="Budget Inn", price_range="budget", star_rating=2)
        make_hotel(name="Grand Palace", price_range="luxury", star_rating=5)
        make_hotel(name="Closed", is_active=False)

        assert [h["name"] for h in client.get("/api/hotels?priceRange=luxury").json()] == ["Grand Palace"]
        assert [h["name"] for h in client.get("/api/hotels?starRating=4").json()] == ["Grand Palace"]
        assert [h["name"] for h in client.get("/api/hotels?search=budget").json()] == ["Budget Inn"]
        assert "Closed" not in [h["name"] for h in client.get("/api/hotels").json()]

    def test_invalid_sort(self, client):
        response = client.get("/api/hotels?sortBy=name")
        assert response.status_code == 400

    def test_hotel_by_slug(self, client, make_hotel):
        hotel = make_hotel(slug="transcorp")
        body = client.get("/api/hotels/transcorp").json()
        assert body["id"] == hotel.id
        assert body["roomTypes"][0]["type"] == "Deluxe"
        assert client.get("/api/hotels/unknown").status_code == 404
