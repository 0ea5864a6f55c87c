"""Tests for the command line entrypoint."""

from unittest.mock import patch

from main import main


class TestMain:
    """Test the main function."""

    def test_no_address(self, capsys):
        assert main([]) == 1
        assert "Usage" in capsys.readouterr().out

    def test_found(self, session, make_response, placemark, capsys, monkeypatch):
        monkeypatch.setenv("GEOCODE_API_KEY", "test-key")
        session.get.return_value = make_response(200, {"Placemark": [placemark()]})

        with patch("src.geocoding.client.requests.Session", return_value=session):
            assert main(["1600", "Amphitheatre", "Pkwy"]) == 0

        out = capsys.readouterr().out
        assert "Latitude: 37.4" in out
        assert "City: Mountain View" in out
        session.close.assert_called_once()

    def test_not_found(self, session, make_response, capsys, monkeypatch):
        monkeypatch.setenv("GEOCODE_API_KEY", "test-key")
        session.get.return_value = make_response(602, {})

        with patch("src.geocoding.client.requests.Session", return_value=session):
            assert main(["nowhere"]) == 1

        assert "G_GEO_UNKNOWN_ADDRESS" in capsys.readouterr().out
