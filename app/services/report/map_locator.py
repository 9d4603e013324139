from collections.abc import Iterable
from dataclasses import dataclass
from urllib.parse import urlencode

from app.schemas.observation import ObservationRecord
from app.services.report.formatting import format_number, to_number

# Fixed half-width of the map window in degrees. This is not a to-scale
# viewport: the box is roughly 1km across near the equator and narrower in
# longitude toward the poles.
BBOX_DELTA = 0.005

OSM_EMBED_URL = "https://www.openstreetmap.org/export/embed.html"


@dataclass(frozen=True)
class MapEmbed:
    bbox: tuple[float, float, float, float]  # min_lon, min_lat, max_lon, max_lat
    marker: tuple[float, float]  # lat, lon

    @property
    def embed_url(self) -> str:
        query = urlencode({
            "bbox": ",".join(format_number(v) for v in self.bbox),
            "layer": "mapnik",
            "marker": ",".join(format_number(v) for v in self.marker),
        })
        return f"{OSM_EMBED_URL}?{query}"


def locate_map(observations: Iterable[ObservationRecord]) -> MapEmbed | None:
    """Center a map on the first geo-tagged observation; None when there is none."""
    for obs in observations:
        lat = to_number(obs.latitude)
        lon = to_number(obs.longitude)
        if lat is None or lon is None:
            continue
        return MapEmbed(
            bbox=(lon - BBOX_DELTA, lat - BBOX_DELTA, lon + BBOX_DELTA, lat + BBOX_DELTA),
            marker=(lat, lon),
        )
    return None
