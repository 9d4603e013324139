"""Assemble a survey snapshot into one printable HTML report.

Every section builder returns a `Markup` fragment. User-supplied text is
always passed through `Markup.format`, which escapes anything that is not
already markup, so only the builders themselves can emit tags.
"""
import datetime as dt
import logging
from collections.abc import Mapping, Sequence

from markupsafe import Markup

from app.schemas.observation import ObservationRecord, PhotoRecord
from app.schemas.sample import AsbestosSampleRecord, PaintSampleRecord, SampleLayerRecord
from app.schemas.survey import FunctionalAreaRecord, HomogeneousAreaRecord, SurveyRecord
from app.services.report.aggregation import (
    AreaRollup,
    QuantitySummary,
    explode_samples,
    is_high_risk,
    risk_key,
    rollup_homogeneous_areas,
    sort_homogeneous_areas,
    summarize_quantities,
)
from app.services.report.assets import AssetResolver
from app.services.report.formatting import (
    PLACEHOLDER,
    format_by_unit,
    format_date_long,
    format_material_type,
    format_number,
    format_optional_number,
    format_status,
    format_substrate,
    format_survey_type,
    format_timestamp,
    or_placeholder,
    sentence_case_if_single_word,
)
from app.services.report.map_locator import MapEmbed, locate_map
from app.services.report.quantity import format_quantity

logger = logging.getLogger(__name__)

PhotoMap = Mapping[str, Sequence[PhotoRecord]]

RISK_LEVELS = ("low", "medium", "high", "critical")

_STYLE = Markup("""
        body { font-family: Arial, sans-serif; max-width: 960px; margin: 0 auto; padding: 20px; line-height: 1.5; }
        .header { background: #f8f9fa; padding: 20px; border-radius: 8px; margin-bottom: 30px; }
        .site-photo { text-align: center; margin: 20px 0; }
        .site-photo img { max-width: 100%; height: auto; border-radius: 8px; }
        .site-photo-caption { margin-top: 10px; font-style: italic; color: #666; }
        .section { margin-bottom: 30px; }
        .stats { display: grid; grid-template-columns: repeat(4, 1fr); gap: 16px; margin: 20px 0; }
        .stat-card { background: #f8f9fa; padding: 12px; border-radius: 8px; text-align: center; }
        .stat-number { font-size: 1.8em; font-weight: bold; color: #007bff; }
        table { width: 100%; border-collapse: collapse; margin: 16px 0; font-size: 0.9em; }
        th, td { border: 1px solid #ddd; padding: 8px; text-align: left; vertical-align: top; }
        th { background: #f8f9fa; }
        td.empty { text-align: center; font-style: italic; color: #666; }
        .observation { border: 1px solid #ddd; padding: 12px; margin-bottom: 12px; border-radius: 5px; }
        .risk-critical, .risk-high { border-left: 4px solid #dc3545; background: #fff5f5; }
        .risk-medium { border-left: 4px solid #ffc107; background: #fffbf0; }
        .risk-low { border-left: 4px solid #28a745; background: #f8fff8; }
        .quantity-section { background: #fff3cd; padding: 16px; border-radius: 8px; border-left: 5px solid #ffc107; }
        .photo-grid { display: flex; flex-wrap: wrap; gap: 8px; }
        .photo-grid figure { margin: 0; width: 160px; }
        .photo-grid img { width: 160px; height: 120px; object-fit: cover; border: 1px solid #ddd; border-radius: 6px; }
        .photo-grid figcaption { font-size: 0.8em; color: #666; word-break: break-all; }
        .map iframe { width: 100%; height: 360px; border: 1px solid #ddd; }
        .page-break { page-break-before: always; }
        .footer { margin-top: 50px; padding-top: 20px; border-top: 2px solid #ddd; font-size: 0.9em; color: #666; }
        @media print {
            body { padding: 15px; font-size: 11pt; }
            .header, .observation, .photo-block { page-break-inside: avoid; }
            tr { page-break-inside: avoid; }
            thead { display: table-header-group; }
        }
""")

_DOCUMENT = Markup("""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="UTF-8">
<meta name="viewport" content="width=device-width, initial-scale=1.0">
<title>Site Survey Report - {title}</title>
<style>{style}</style>
</head>
<body>
{body}
</body>
</html>
""")


def _join(fragments) -> Markup:
    return Markup("\n").join(fragments)


def _row(values: Sequence) -> Markup:
    return Markup("<tr>{}</tr>").format(
        Markup("").join(Markup("<td>{}</td>").format(value) for value in values)
    )


def _table(headers: Sequence[str], rows: Sequence[Markup], empty_message: str) -> Markup:
    """Render a table; an empty body becomes one row spanning every column."""
    head = Markup("").join(Markup("<th>{}</th>").format(h) for h in headers)
    if rows:
        body = _join(rows)
    else:
        body = Markup('<tr><td class="empty" colspan="{}">{}</td></tr>').format(
            len(headers), empty_message
        )
    return Markup("<table>\n<thead><tr>{}</tr></thead>\n<tbody>\n{}\n</tbody>\n</table>").format(
        head, body
    )


def _field(label: str, value) -> Markup:
    return Markup("<p><strong>{}:</strong> {}</p>").format(label, value)


def photo_grid(photos: Sequence[PhotoRecord], resolver: AssetResolver) -> Markup:
    figures = []
    for photo in photos:
        src = resolver.photo_src(photo)
        if not src:
            continue
        caption = photo.original_name or photo.filename or ""
        figures.append(
            Markup('<figure><img src="{}" alt="{}"><figcaption>{}</figcaption></figure>').format(
                src, caption or "Photo", caption
            )
        )
    if not figures:
        return Markup("")
    return Markup('<div class="photo-grid">{}</div>').format(Markup("").join(figures))


def _sample_photo_blocks(samples, photos_by_sample: PhotoMap, resolver: AssetResolver) -> Markup:
    blocks = []
    for sample in samples:
        grid = photo_grid(photos_by_sample.get(sample.id, ()), resolver)
        if not grid:
            continue
        blocks.append(
            Markup('<div class="photo-block">\n<h4>Sample {} Photos</h4>\n{}\n</div>').format(
                sample.sample_number, grid
            )
        )
    return _join(blocks)


def cover_section(
    survey: SurveyRecord,
    observations: Sequence[ObservationRecord],
    sample_count: int,
    site_photo_src: str,
) -> Markup:
    high = sum(1 for obs in observations if is_high_risk(obs))
    medium = sum(1 for obs in observations if risk_key(obs) == "medium")
    stats = [
        (len(observations), "Total Observations"),
        (high, "High Risk Areas"),
        (medium, "Medium Risk Areas"),
        (sample_count, "Samples Collected"),
    ]
    cards = _join(
        Markup('<div class="stat-card"><div class="stat-number">{}</div><div>{}</div></div>').format(
            number, label
        )
        for number, label in stats
    )
    photo = Markup("")
    if site_photo_src:
        photo = Markup(
            '<div class="site-photo">\n<img src="{}" alt="Site Photo - {}">\n'
            '<div class="site-photo-caption">Site Overview Photo</div>\n</div>'
        ).format(site_photo_src, survey.site_name)
    return Markup(
        '<div class="header">\n<h1>Site Survey Report</h1>\n<h2>{name}</h2>\n{fields}\n</div>\n'
        '{photo}\n'
        '<div class="section">\n<h3>Executive Summary</h3>\n<div class="stats">\n{cards}\n</div>\n</div>'
    ).format(
        name=survey.site_name,
        fields=_join([
            _field("Address", survey.address or "Not specified"),
            _field("Survey Type", or_placeholder(format_survey_type(survey.survey_type))),
            _field("Survey Date", format_date_long(survey.survey_date)),
            _field("Inspector", survey.inspector),
            _field("Status", or_placeholder(format_status(survey.status))),
        ]),
        photo=photo,
        cards=cards,
    )


def _rollup_cells(rollup: AreaRollup | None) -> tuple[str, str]:
    if rollup is None:
        return "0", PLACEHOLDER
    total = format_number(rollup.total) if rollup.total > 0 else PLACEHOLDER
    return str(rollup.count), total


def area_summary_section(
    functional_areas: Sequence[FunctionalAreaRecord],
    homogeneous_areas: Sequence[HomogeneousAreaRecord],
    asbestos_samples: Sequence[AsbestosSampleRecord],
) -> Markup:
    fa_rows = [_row([area.title, or_placeholder(area.description)]) for area in functional_areas]
    rollups = rollup_homogeneous_areas(asbestos_samples)
    ha_rows = []
    for area in sort_homogeneous_areas(homogeneous_areas):
        count, total = _rollup_cells(rollups.get(area.ha_id) if area.ha_id else None)
        ha_rows.append(_row([
            or_placeholder(area.ha_id),
            area.title,
            or_placeholder(area.description),
            count,
            total,
        ]))
    return Markup(
        '<div class="section">\n<h3>Area Summary</h3>\n'
        "<h4>Functional Areas</h4>\n{}\n<h4>Homogeneous Areas</h4>\n{}\n</div>"
    ).format(
        _table(["Functional Area", "Description"], fa_rows, "No functional areas."),
        _table(
            ["HA", "Title", "Description", "Samples", "Total Quantity"],
            ha_rows,
            "No homogeneous areas.",
        ),
    )


def asbestos_section(
    samples: Sequence[AsbestosSampleRecord],
    layers_by_sample: Mapping[str, Sequence[SampleLayerRecord]],
    photos_by_sample: PhotoMap,
    resolver: AssetResolver,
) -> Markup:
    rows = []
    for row in explode_samples(samples, layers_by_sample):
        sample = row.sample
        location = " - ".join(v for v in (sample.sample_location, row.description) if v)
        rows.append(_row([
            row.label,
            or_placeholder(sample.functional_area),
            or_placeholder(sample.homogeneous_area),
            or_placeholder(location),
            or_placeholder(format_material_type(row.material_type)),
            or_placeholder(row.asbestos_type),
            format_optional_number(row.asbestos_percent, "%"),
            or_placeholder(format_quantity(sample.estimated_quantity, sample.quantity_unit)),
            or_placeholder(sentence_case_if_single_word(sample.condition)),
            or_placeholder(sentence_case_if_single_word(sample.collection_method)),
            or_placeholder(sample.results),
            or_placeholder(row.notes),
        ]))
    table = _table(
        [
            "Sample #", "Functional Area", "HA", "Location", "Material", "Asbestos Type",
            "Percent", "Quantity", "Condition", "Collection Method", "Results", "Notes",
        ],
        rows,
        "No asbestos samples.",
    )
    return Markup('<div class="section page-break">\n<h3>Asbestos Samples</h3>\n{}\n{}\n</div>').format(
        table, _sample_photo_blocks(samples, photos_by_sample, resolver)
    )


def paint_section(
    samples: Sequence[PaintSampleRecord],
    photos_by_sample: PhotoMap,
    resolver: AssetResolver,
) -> Markup:
    rows = [
        _row([
            sample.sample_number,
            or_placeholder(sample.functional_area),
            or_placeholder(sample.sample_location),
            or_placeholder(sample.sample_description),
            or_placeholder(format_substrate(sample)),
            or_placeholder(sentence_case_if_single_word(sample.collection_method)),
            format_optional_number(sample.lead_result_mg_kg, " mg/kg"),
            format_optional_number(sample.cadmium_result_mg_kg, " mg/kg"),
            or_placeholder(sample.notes),
        ])
        for sample in samples
    ]
    table = _table(
        [
            "Sample #", "Functional Area", "Location", "Description", "Substrate",
            "Collection Method", "Lead", "Cadmium", "Notes",
        ],
        rows,
        "No paint samples.",
    )
    return Markup('<div class="section page-break">\n<h3>Paint Samples</h3>\n{}\n{}\n</div>').format(
        table, _sample_photo_blocks(samples, photos_by_sample, resolver)
    )


def _observation_block(obs: ObservationRecord, photos: Sequence[PhotoRecord], resolver: AssetResolver) -> Markup:
    risk = risk_key(obs)
    css = f"observation risk-{risk}" if risk in RISK_LEVELS else "observation"
    fields = [
        _field("Homogeneous Area", or_placeholder(obs.homogeneous_area)),
        _field("Material Type", or_placeholder(format_material_type(obs.material_type))),
        _field("Condition", or_placeholder(sentence_case_if_single_word(obs.condition))),
        _field("Risk Level", sentence_case_if_single_word(obs.risk_level) or "Not assessed"),
    ]
    if obs.quantity:
        fields.append(_field("Quantity", format_quantity(obs.quantity)))
    if obs.sample_collected:
        fields.append(_field("Sample ID", obs.sample_id or "Not specified"))
    fields.append(_field("Notes", or_placeholder(obs.notes)))
    return Markup('<div class="{}">\n<h4>{}</h4>\n{}\n{}\n</div>').format(
        css,
        sentence_case_if_single_word(obs.area),
        _join(fields),
        photo_grid(photos, resolver),
    )


def map_block(embed: MapEmbed | None) -> Markup:
    if embed is None:
        return Markup("")
    lat, lon = embed.marker
    return Markup(
        '<div class="map">\n<h4>Site Map</h4>\n'
        '<iframe src="{}" title="Observation map" loading="lazy"></iframe>\n'
        "<p><small>Marker at {}, {}</small></p>\n</div>"
    ).format(embed.embed_url, format_number(lat), format_number(lon))


def observations_section(
    observations: Sequence[ObservationRecord],
    photos_by_observation: PhotoMap,
    resolver: AssetResolver,
) -> Markup:
    if observations:
        blocks = _join(
            _observation_block(obs, photos_by_observation.get(obs.id, ()), resolver)
            for obs in observations
        )
    else:
        blocks = Markup('<p class="empty"><em>No observations recorded.</em></p>')
    return Markup('<div class="section page-break">\n<h3>Observations</h3>\n{}\n{}\n</div>').format(
        blocks, map_block(locate_map(observations))
    )


def quantity_section(summary: QuantitySummary) -> Markup:
    stats = [
        (format_by_unit(summary.hazardous), "Total Quantity in Hazardous Areas (HA)"),
        (format_by_unit(summary.sampled), "Total Quantity by Sample"),
        (summary.hazardous_count, "Hazardous Areas Count"),
    ]
    cards = _join(
        Markup('<div class="stat-card"><div class="stat-number">{}</div><div>{}</div></div>').format(
            value, label
        )
        for value, label in stats
    )
    rows = [
        _row([
            or_placeholder(format_material_type(material)),
            format_by_unit(quantities.total),
            format_by_unit(quantities.hazardous),
            format_by_unit(quantities.sampled),
        ])
        for material, quantities in summary.by_material.items()
    ]
    table = _table(
        ["Material Type", "Total Quantity", "Hazardous Quantity", "Sampled Quantity"],
        rows,
        "No quantity data available.",
    )
    return Markup(
        '<div class="section quantity-section">\n<h3>Quantity Analysis</h3>\n'
        '<div class="stats">\n{}\n</div>\n<h4>Material Quantity Breakdown</h4>\n{}\n</div>'
    ).format(cards, table)


def notes_section(survey: SurveyRecord) -> Markup:
    if not (survey.notes or "").strip():
        return Markup("")
    return Markup('<div class="section">\n<h3>Survey Notes</h3>\n<p>{}</p>\n</div>').format(survey.notes)


def footer_section(
    survey: SurveyRecord,
    observations: Sequence[ObservationRecord],
    generated_at: dt.datetime | None = None,
) -> Markup:
    lines = []
    if generated_at is not None:
        lines.append(_field("Report Generated", format_timestamp(generated_at)))
    lines.append(_field(
        "Survey Coverage",
        f"Report contains {len(observations)} observation(s) conducted during the survey.",
    ))
    high = sum(1 for obs in observations if is_high_risk(obs))
    if high:
        lines.append(Markup('<p class="warning"><strong>IMPORTANT:</strong> {}</p>').format(
            f"This survey identified {high} high-risk area(s) requiring immediate attention and remediation."
        ))
    lines.append(_field(
        "Inspector Certification",
        f"This report was prepared by {survey.inspector} and reflects the conditions "
        "observed at the time of inspection.",
    ))
    return Markup('<div class="footer">\n{}\n</div>').format(_join(lines))


def render(
    survey: SurveyRecord,
    observations: Sequence[ObservationRecord],
    photos_by_observation: PhotoMap,
    homogeneous_areas: Sequence[HomogeneousAreaRecord],
    functional_areas: Sequence[FunctionalAreaRecord],
    asbestos_samples: Sequence[AsbestosSampleRecord],
    paint_samples: Sequence[PaintSampleRecord],
    layers_by_sample: Mapping[str, Sequence[SampleLayerRecord]],
    asbestos_photos_by_sample: PhotoMap,
    paint_photos_by_sample: PhotoMap,
    base_url: str | None = None,
    site_photo_override: str | None = None,
    *,
    resolver: AssetResolver | None = None,
    generated_at: dt.datetime | None = None,
) -> str:
    """Render the full survey report as an HTML string.

    Pure function of its inputs: no I/O and no clock reads, so identical
    arguments always give identical output. `resolver` overrides the default
    strategy built from `base_url`.
    """
    if resolver is None:
        resolver = AssetResolver(base_url=base_url)

    logger.debug(
        "Rendering survey %s: %d observations, %d asbestos samples, %d paint samples",
        survey.id, len(observations), len(asbestos_samples), len(paint_samples),
    )

    sections = [
        cover_section(
            survey,
            observations,
            len(asbestos_samples) + len(paint_samples),
            resolver.site_photo_src(site_photo_override, survey.site_photo_url),
        ),
        area_summary_section(functional_areas, homogeneous_areas, asbestos_samples),
        asbestos_section(asbestos_samples, layers_by_sample, asbestos_photos_by_sample, resolver),
        paint_section(paint_samples, paint_photos_by_sample, resolver),
        observations_section(observations, photos_by_observation, resolver),
        quantity_section(summarize_quantities(observations)),
        notes_section(survey),
        footer_section(survey, observations, generated_at),
    ]
    body = _join(section for section in sections if section)
    return str(_DOCUMENT.format(title=survey.site_name, style=_STYLE, body=body))
