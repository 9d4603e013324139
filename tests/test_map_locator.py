from app.services.report.map_locator import BBOX_DELTA, locate_map
from tests.factories import make_observation


def test_no_map_without_coordinates():
    observations = [
        make_observation("o1"),
        make_observation("o2", latitude=40.0),
        make_observation("o3", latitude="north", longitude="west"),
    ]
    assert locate_map(observations) is None
    assert locate_map([]) is None


def test_map_centered_on_first_valid_pair():
    observations = [
        make_observation("o1", latitude=None, longitude=-70.0),
        make_observation("o2", latitude=40.0, longitude=-74.0),
        make_observation("o3", latitude=10.0, longitude=10.0),
    ]

    embed = locate_map(observations)

    assert embed is not None
    assert embed.marker == (40.0, -74.0)
    min_lon, min_lat, max_lon, max_lat = embed.bbox
    assert min_lon == -74.0 - BBOX_DELTA
    assert max_lon == -74.0 + BBOX_DELTA
    assert min_lat == 40.0 - BBOX_DELTA
    assert max_lat == 40.0 + BBOX_DELTA


def test_numeric_text_coordinates_are_accepted():
    embed = locate_map([make_observation(latitude="51.5", longitude="-0.12")])
    assert embed.marker == (51.5, -0.12)


def test_embed_url_contains_bbox_and_marker():
    embed = locate_map([make_observation(latitude=40.0, longitude=-74.0)])
    url = embed.embed_url
    assert url.startswith("https://www.openstreetmap.org/export/embed.html?")
    assert "bbox=-74.005%2C39.995%2C-73.995%2C40.005" in url
    assert "marker=40%2C-74" in url
