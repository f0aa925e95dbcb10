"""
Font resolution for text slots.

Fonts are resolved through an ordered chain of resolvers. Each resolver
handles one source and returns a loaded face, or ``None`` when its source is
not configured or cannot be loaded::

    explicit source (file | system | url)
        -> configured default font
        -> slot font file
        -> slot font URL
        -> slot system font name
        -> built-in face

Resolvers never raise for missing or broken fonts; the chain only reports
whether a real font was found.
"""

import io
import logging
import os
from typing import Iterator, List, Optional, Sequence, Union

import requests
from attrs import define, field
from PIL import ImageFont

from image_template.api.template import TextOptions
from image_template.config import Settings
from image_template.constants import FONT_EXTENSIONS, FontSource
from image_template.utils import new_registry

logger = logging.getLogger(__name__)

Face = Union[ImageFont.FreeTypeFont, ImageFont.ImageFont]

RESOLVERS, register = new_registry(attribute="source")

# Only these sources can be selected explicitly.
EXPLICIT_SOURCES = (FontSource.FILE, FontSource.SYSTEM, FontSource.URL)

SYSTEM_FONT_DIRS = (
    "/usr/share/fonts/truetype",
    "/usr/share/fonts",
    "/usr/local/share/fonts",
    "/System/Library/Fonts",
    "/Library/Fonts",
    "C:\\Windows\\Fonts",
)


def _source_name(value: Union[FontSource, str]) -> str:
    return getattr(value, "value", value)


@define(frozen=True)
class FontResolution:
    """Outcome of resolving a font: the face and where it came from."""

    face: Face
    source: str = field(converter=_source_name)
    resolved: bool = True


def load_face(font: Union[str, bytes], size: float) -> Optional[Face]:
    """Load a TrueType/OpenType face from a path or raw bytes."""
    try:
        if isinstance(font, bytes):
            return ImageFont.truetype(io.BytesIO(font), size)
        return ImageFont.truetype(font, size)
    except (OSError, ValueError) as e:
        logger.debug("Cannot load font: %s" % e)
        return None


class FontResolver(object):
    """
    Base class of font resolvers.

    Subclasses implement :py:meth:`applies` and :py:meth:`resolve`.
    """

    source = ""

    def applies(self, options: TextOptions) -> bool:
        """True when the slot configures this resolver's source."""
        raise NotImplementedError()

    def resolve(self, options: TextOptions, size: float) -> Optional[Face]:
        raise NotImplementedError()

    def __repr__(self) -> str:
        return "%s()" % self.__class__.__name__


@register(FontSource.FILE)
class FileFontResolver(FontResolver):
    """Font file given by ``font_path``."""

    def applies(self, options: TextOptions) -> bool:
        return bool(options.font_path)

    def resolve(self, options: TextOptions, size: float) -> Optional[Face]:
        if not options.font_path:
            return None
        return load_face(options.font_path, size)


@register(FontSource.URL)
class URLFontResolver(FontResolver):
    """
    Font downloaded from ``font_url`` and loaded from memory.

    Without an injected session, one is opened on the first download and
    released by :py:meth:`close`.
    """

    def __init__(
        self, timeout: float = 10.0, session: Optional[requests.Session] = None
    ) -> None:
        self.timeout = timeout
        self._session = session
        self._owns_session = session is None

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def close(self) -> None:
        if self._owns_session and self._session is not None:
            self._session.close()
            self._session = None

    def applies(self, options: TextOptions) -> bool:
        return bool(options.font_url)

    def resolve(self, options: TextOptions, size: float) -> Optional[Face]:
        if not options.font_url:
            return None
        data = self.fetch(options.font_url)
        if data is None:
            return None
        return load_face(data, size)

    def fetch(self, url: str) -> Optional[bytes]:
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.debug("Cannot download font %s: %s" % (url, e))
            return None
        return response.content


@register(FontSource.SYSTEM)
class SystemFontResolver(FontResolver):
    """
    Font named by ``font_name``, searched in the system font directories.

    Each directory is tried with ``.ttf`` and ``.otf``, first with the name
    as given and then lowercased.
    """

    def __init__(self, directories: Optional[Sequence[str]] = None) -> None:
        if directories is None:
            directories = default_font_dirs()
        self.directories = list(directories)

    def applies(self, options: TextOptions) -> bool:
        return bool(options.font_name)

    def resolve(self, options: TextOptions, size: float) -> Optional[Face]:
        if not options.font_name:
            return None
        path = self.find(options.font_name)
        if path is None:
            logger.debug("System font %s not found" % options.font_name)
            return None
        return load_face(path, size)

    def find(self, name: str) -> Optional[str]:
        for path in self._candidates(name):
            if os.path.isfile(path):
                return path
        return None

    def _candidates(self, name: str) -> Iterator[str]:
        for directory in self.directories:
            for ext in FONT_EXTENSIONS:
                yield os.path.join(directory, name + ext)
                yield os.path.join(directory, name.lower() + ext)


class ConfiguredFontResolver(FontResolver):
    """Process default font assembled from the configured font dir and file."""

    source = "default"

    def __init__(self, path: str = "") -> None:
        self.path = path

    def applies(self, options: TextOptions) -> bool:
        return bool(self.path)

    def resolve(self, options: TextOptions, size: float) -> Optional[Face]:
        if not self.path:
            return None
        return load_face(self.path, size)


def default_font_dirs(settings: Optional[Settings] = None) -> List[str]:
    """Conventional font directories followed by the configured font dir."""
    directories = list(SYSTEM_FONT_DIRS)
    windir = os.environ.get("WINDIR")
    if windir:
        directories.append(os.path.join(windir, "Fonts"))
    if settings is not None and settings.font_dir:
        directories.append(settings.font_dir)
    return directories


def builtin_face(size: float) -> Face:
    """Pillow's bundled face; always available."""
    return ImageFont.load_default(size)


class FontResolverChain(object):
    """
    Ordered font resolution.

    Example::

        chain = FontResolverChain(Settings())
        resolution = chain.resolve(slot.text_opts)
        if not resolution.resolved:
            logger.warning("Using the built-in font")
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
        system_dirs: Optional[Sequence[str]] = None,
    ) -> None:
        self.settings = settings or Settings()
        if system_dirs is None:
            system_dirs = default_font_dirs(self.settings)
        self.resolvers = {
            FontSource.FILE: RESOLVERS[FontSource.FILE](),
            FontSource.URL: RESOLVERS[FontSource.URL](
                timeout=self.settings.font_fetch_timeout, session=session
            ),
            FontSource.SYSTEM: RESOLVERS[FontSource.SYSTEM](system_dirs),
        }
        self.default = ConfiguredFontResolver(self.settings.default_font_path)

    def font_size(self, options: TextOptions) -> float:
        if options.font_size > 0:
            return options.font_size
        return self.settings.default_font_size

    def explicit(self, options: TextOptions) -> Optional[FontResolver]:
        """Resolver selected by ``font_source``, if its field is set."""
        if options.font_source not in EXPLICIT_SOURCES:
            return None
        resolver = self.resolvers[options.font_source]
        return resolver if resolver.applies(options) else None

    def close(self) -> None:
        """Release the download session, if one was opened."""
        self.resolvers[FontSource.URL].close()

    def discovery(self) -> List[FontResolver]:
        """Automatic discovery order."""
        return [
            self.default,
            self.resolvers[FontSource.FILE],
            self.resolvers[FontSource.URL],
            self.resolvers[FontSource.SYSTEM],
        ]

    def resolve(self, options: TextOptions) -> FontResolution:
        size = self.font_size(options)

        explicit = self.explicit(options)
        if explicit is not None:
            face = explicit.resolve(options, size)
            if face is not None:
                return FontResolution(face, explicit.source)
            logger.warning(
                "Failed to load %s font, trying automatic discovery" % explicit.source.value
            )

        for resolver in self.discovery():
            if resolver is explicit or not resolver.applies(options):
                continue
            logger.debug("Trying %r" % resolver)
            face = resolver.resolve(options, size)
            if face is not None:
                return FontResolution(face, resolver.source)

        return FontResolution(builtin_face(size), "builtin", resolved=False)
