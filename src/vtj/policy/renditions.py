"""Static rendition table."""

from vtj.policy.types import RenditionName, RenditionSpec

MIB = 1024 * 1024

OGP_RENDITION = RenditionSpec(
    name=RenditionName.OGP,
    target_max_width=1280,
    target_max_height=720,
    crf=28,
    preset="veryfast",
    content_type="video/mp4; codecs=avc1.42E01E, mp4a.40.2",
    duration_cap_seconds=8 * 60,
    max_compliant_duration_seconds=8 * 60,
    max_compliant_size_bytes=50 * MIB,
)

MAIN_RENDITION = RenditionSpec(
    name=RenditionName.MAIN,
    target_max_width=1920,
    target_max_height=1080,
    crf=23,
    preset="fast",
    content_type="video/mp4; codecs=avc1.64002A, mp4a.40.2",
)

# Processing order when renditions run sequentially
RENDITIONS: dict[RenditionName, RenditionSpec] = {
    RenditionName.OGP: OGP_RENDITION,
    RenditionName.MAIN: MAIN_RENDITION,
}

PROBE_CONTENT_TYPE = "application/json; charset=UTF-8"
