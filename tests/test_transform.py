import pytest

from streetfinder.config.settings import get_settings
from streetfinder.core.geo import GeoPoint
from streetfinder.core.transform import ProjTransform


def test_rd_origin_lands_near_amersfoort_reference():
    transform = ProjTransform.from_settings(get_settings().projection)

    # Onze Lieve Vrouwetoren, Amersfoort: the RD New reference point (155000, 463000).
    here = transform.to_projected(GeoPoint(lat=52.15517440, lon=5.38720621))

    assert here.x == pytest.approx(155000, abs=50)
    assert here.y == pytest.approx(463000, abs=50)


def test_round_trip_is_sub_meter():
    transform = ProjTransform()
    origin = GeoPoint(lat=52.0907, lon=5.1214)

    back = transform.to_geographic(transform.to_projected(origin))

    # 1e-5 degrees is roughly one meter at this latitude.
    assert back.lat == pytest.approx(origin.lat, abs=1e-5)
    assert back.lon == pytest.approx(origin.lon, abs=1e-5)
