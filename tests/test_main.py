class TestApplication:

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
        assert "X-Process-Time" in response.headers

    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["endpoints"]["appointments"] == "/appointment"

    def test_unknown_route(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 404
        assert response.json() == {"message": "Not Found"}

    def test_settings_are_per_app(self, app, settings):
        assert app.state.settings is settings
        assert app.state.database.url == settings.TEST_DATABASE_URL
