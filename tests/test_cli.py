import json
from datetime import datetime, timezone

from streetfinder import cli
from streetfinder.core.errors import TransportError
from streetfinder.domain.models import GeoPoint, StreetResult, StreetSearchResult


def _fake_find_streets(query, *, settings=None):  # noqa: ARG001
    return StreetSearchResult(
        generated_at=datetime(2026, 1, 5, 10, 0, tzinfo=timezone.utc),
        query=query,
        results=[
            StreetResult(
                street_name="Oudegracht",
                place_name="Utrecht",
                municipality_name="Utrecht",
                location=GeoPoint(lat=52.0907, lon=5.1214),
                distance_m=12,
            )
        ],
    )


def test_cli_find_prints_ranked_table(monkeypatch, capsys):
    monkeypatch.setattr(cli, "find_streets", _fake_find_streets)

    code = cli.main(["find", "--lat", "52.09", "--lon", "5.12", "--radius", "75"])

    out = capsys.readouterr().out
    assert code == 0
    assert "Oudegracht, Utrecht (Utrecht)" in out
    assert "12m" in out


def test_cli_find_json_output(monkeypatch, capsys):
    monkeypatch.setattr(cli, "find_streets", _fake_find_streets)

    code = cli.main(["find", "--lat", "52.09", "--lon", "5.12", "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert code == 0
    assert payload["query"]["radius_m"] == 100
    assert payload["results"][0]["distance_m"] == 12


def test_cli_find_reports_errors(monkeypatch, capsys):
    def failing(query, *, settings=None):  # noqa: ARG001
        raise TransportError("service unavailable")

    monkeypatch.setattr(cli, "find_streets", failing)

    code = cli.main(["find", "--lat", "52.09", "--lon", "5.12"])

    assert code == 1
    assert "service unavailable" in capsys.readouterr().err
