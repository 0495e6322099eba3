"""
Freesound Data Models

Dataclasses and enums for Freesound API responses.
Based on Freesound API v2 documentation: https://freesound.org/docs/api/resources_apiv2.html
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, List, Any


def _value(data: Dict[str, Any], key: str, default: Any) -> Any:
    """Read a key from an API dict, treating JSON null like a missing key."""
    value = data.get(key)
    return default if value is None else value


class License(Enum):
    """Creative Commons license types used by Freesound."""

    CC0 = "Creative Commons 0"
    CC_BY = "Attribution"
    CC_BY_NC = "Attribution NonCommercial"
    CC_BY_SA = "Attribution ShareAlike"
    CC_BY_NC_SA = "Attribution NonCommercial ShareAlike"
    SAMPLING_PLUS = "Sampling+"

    @property
    def allows_commercial(self) -> bool:
        """Check if license allows commercial use."""
        return self in (
            License.CC0,
            License.CC_BY,
            License.CC_BY_SA,
            License.SAMPLING_PLUS,
        )

    @property
    def requires_attribution(self) -> bool:
        """Check if license requires attribution."""
        return self != License.CC0

    @classmethod
    def from_string(cls, license_str: str) -> 'License':
        """
        Parse a license from an API response.

        Freesound reports licenses either by name ("Attribution NonCommercial")
        or by deed URL ("http://creativecommons.org/licenses/by-nc/4.0/").
        """
        value = (license_str or '').lower()
        if 'creative commons 0' in value or 'cc0' in value or '/zero/' in value:
            return cls.CC0
        if 'sampling' in value:
            return cls.SAMPLING_PLUS

        noncommercial = 'noncommercial' in value or 'by-nc' in value
        sharealike = 'sharealike' in value or 'by-sa' in value or '-sa/' in value
        if noncommercial and sharealike:
            return cls.CC_BY_NC_SA
        elif noncommercial:
            return cls.CC_BY_NC
        elif sharealike:
            return cls.CC_BY_SA
        return cls.CC_BY  # Default


@dataclass
class Previews:
    """Preview URLs for different formats and qualities."""

    preview_hq_mp3: str = ""  # ~128kbps
    preview_lq_mp3: str = ""  # ~64kbps
    preview_hq_ogg: str = ""  # ~192kbps
    preview_lq_ogg: str = ""  # ~80kbps

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Previews':
        """Create from API response dict."""
        return cls(
            preview_hq_mp3=_value(data, 'preview-hq-mp3', ''),
            preview_lq_mp3=_value(data, 'preview-lq-mp3', ''),
            preview_hq_ogg=_value(data, 'preview-hq-ogg', ''),
            preview_lq_ogg=_value(data, 'preview-lq-ogg', ''),
        )

    @property
    def best_preview(self) -> str:
        """Get best available preview URL."""
        return self.preview_hq_mp3 or self.preview_hq_ogg or self.preview_lq_mp3 or self.preview_lq_ogg


@dataclass
class Images:
    """Waveform and spectrogram image URLs."""

    waveform_l: str = ""
    waveform_m: str = ""
    spectral_l: str = ""
    spectral_m: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Images':
        return cls(
            waveform_l=_value(data, 'waveform_l', ''),
            waveform_m=_value(data, 'waveform_m', ''),
            spectral_l=_value(data, 'spectral_l', ''),
            spectral_m=_value(data, 'spectral_m', ''),
        )


@dataclass
class Sound:
    """
    Represents a sound from Freesound.org.

    Maps to the Freesound API sound instance resource. Search results only
    carry the fields requested with ``fields``, so every attribute has a
    default that is used when the key is absent or null.
    """

    id: int = 0
    url: str = ""
    name: str = ""
    tags: List[str] = field(default_factory=list)
    description: str = ""
    geotag: Optional[str] = None  # "lat lon"
    created: str = ""
    license: str = ""
    sound_type: str = ""  # wav, aif, aiff, mp3, m4a or flac
    channels: int = 0
    filesize: int = 0
    bitrate: Optional[float] = None
    bitdepth: Optional[int] = None
    duration: float = 0.0
    samplerate: float = 0.0
    username: str = ""
    pack: Optional[str] = None
    download: str = ""
    bookmark: str = ""
    previews: Optional[Previews] = None
    images: Optional[Images] = None
    num_downloads: int = 0
    avg_rating: float = 0.0
    num_ratings: int = 0
    rate: str = ""
    comments: str = ""
    num_comments: int = 0
    comment: str = ""
    similar_sounds: str = ""
    analysis: Optional[Any] = None  # raw descriptor values
    analysis_stats: str = ""
    analysis_frames: str = ""

    @property
    def created_at(self) -> Optional[datetime]:
        """Upload date as a datetime, if the API returned a parseable one."""
        if not self.created:
            return None
        try:
            return datetime.fromisoformat(self.created.replace('Z', '+00:00'))
        except ValueError:
            return None

    @property
    def license_type(self) -> License:
        """Get parsed license type."""
        return License.from_string(self.license)

    @property
    def allows_commercial(self) -> bool:
        """Check if sound can be used commercially."""
        return self.license_type.allows_commercial

    @property
    def requires_attribution(self) -> bool:
        """Check if attribution is required."""
        return self.license_type.requires_attribution

    @property
    def attribution_text(self) -> str:
        """Generate attribution text for this sound."""
        return f'"{self.name}" by {self.username} via Freesound.org, licensed under {self.license}'

    @property
    def duration_formatted(self) -> str:
        """Format duration as MM:SS or HH:MM:SS."""
        total_seconds = int(self.duration)
        hours, remainder = divmod(total_seconds, 3600)
        minutes, seconds = divmod(remainder, 60)

        if hours > 0:
            return f"{hours}:{minutes:02d}:{seconds:02d}"
        return f"{minutes}:{seconds:02d}"

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'Sound':
        """Create Sound from API response dict."""
        previews = None
        if isinstance(data.get('previews'), dict):
            previews = Previews.from_dict(data['previews'])

        images = None
        if isinstance(data.get('images'), dict):
            images = Images.from_dict(data['images'])

        return cls(
            id=_value(data, 'id', 0),
            url=_value(data, 'url', ''),
            name=_value(data, 'name', ''),
            tags=list(_value(data, 'tags', [])),
            description=_value(data, 'description', ''),
            geotag=data.get('geotag'),
            created=_value(data, 'created', ''),
            license=_value(data, 'license', ''),
            sound_type=_value(data, 'type', ''),
            channels=_value(data, 'channels', 0),
            filesize=_value(data, 'filesize', 0),
            bitrate=data.get('bitrate'),
            bitdepth=data.get('bitdepth'),
            duration=_value(data, 'duration', 0.0),
            samplerate=_value(data, 'samplerate', 0.0),
            username=_value(data, 'username', ''),
            pack=data.get('pack'),
            download=_value(data, 'download', ''),
            bookmark=_value(data, 'bookmark', ''),
            previews=previews,
            images=images,
            num_downloads=_value(data, 'num_downloads', 0),
            avg_rating=_value(data, 'avg_rating', 0.0),
            num_ratings=_value(data, 'num_ratings', 0),
            rate=_value(data, 'rate', ''),
            comments=_value(data, 'comments', ''),
            num_comments=_value(data, 'num_comments', 0),
            comment=_value(data, 'comment', ''),
            similar_sounds=_value(data, 'similar_sounds', ''),
            analysis=data.get('analysis'),
            analysis_stats=_value(data, 'analysis_stats', ''),
            analysis_frames=_value(data, 'analysis_frames', ''),
        )


@dataclass
class SearchResponse:
    """Result page of a text search."""

    count: int
    results: List[Sound] = field(default_factory=list)
    next: Optional[str] = None
    previous: Optional[str] = None

    @property
    def has_next(self) -> bool:
        return self.next is not None

    @property
    def has_previous(self) -> bool:
        return self.previous is not None

    @classmethod
    def from_api_response(cls, data: Dict[str, Any]) -> 'SearchResponse':
        """Create from API search response."""
        return cls(
            count=_value(data, 'count', 0),
            results=[
                Sound.from_api_response(sound_data)
                for sound_data in _value(data, 'results', [])
            ],
            next=data.get('next'),
            previous=data.get('previous'),
        )
