"""Module id to location resolution."""

from typing import List, Optional, Sequence
import logging

from modloader.config import LoaderConfig
from modloader.errors import MissingBaseConfig
from modloader.rules.engine import MapRewriter
from .alias import AliasMapper
from .canonicalizer import PathCanonicalizer

logger = logging.getLogger(__name__)


class UriResolver:
    """Resolves module ids into canonical locations.

    Ids fall into four classes, checked in this order:

    - absolute: 'http://cdn/a', '//cdn/a' -- used as is
    - relative: './a', '../a' -- resolved against the referencing location
    - root: '/a' -- resolved against the host of the referencing location
    - top-level: 'a/b' -- resolved against config.base

    The result is canonicalized, given its default extension and run
    through the configured map rules.
    """

    def __init__(
        self,
        config: Optional[LoaderConfig] = None,
        canonicalizer: Optional[PathCanonicalizer] = None
    ) -> None:
        self.config = config or LoaderConfig.load_default()
        self.canonicalizer = canonicalizer or PathCanonicalizer()
        self.alias_mapper = AliasMapper(self.config.alias)
        self.rewriter = MapRewriter(self.config.map)

    @property
    def page_url(self) -> str:
        """Location of the hosting page/process, the default reference."""
        loc = self.config.location
        url = loc.protocol + "//" + loc.host + self.canonicalizer.normalize_pathname(loc.pathname)

        # Local Windows paths: C:\path\to\xx.js
        if "\\" in url:
            url = url.replace("\\", "/")

        return url

    def resolve_id(
        self,
        id: str,
        ref_location: Optional[str] = None,
        alias_parsed: bool = False
    ) -> str:
        """Convert a module id to its canonical location.

        Raises:
            MissingBaseConfig: for a top-level id when config.base is empty
            InvalidPath: when '..' segments climb above the root
        """
        if not alias_parsed:
            id = self.alias_mapper.parse(id)

        ref_location = ref_location or self.page_url

        if self.canonicalizer.is_absolute(id):
            location = id
        elif id.startswith("./") or id.startswith("../"):
            # './a' -> 'a', one less segment to walk in realpath
            if id.startswith("./"):
                id = id[2:]
            location = self.canonicalizer.dirname(ref_location) + id
        elif id.startswith("/"):
            location = self.canonicalizer.get_host(ref_location) + id
        else:
            location = self._get_base(id) + "/" + id

        location = self.canonicalizer.normalize(location)
        location = self.rewriter.apply(location)

        logger.debug(f"[module:resolve] {id} -> {location}")
        return location

    def resolve_ids(self, ids: Sequence[str], ref_location: Optional[str] = None) -> List[str]:
        """Convert module ids to locations, keeping their order."""
        return [self.resolve_id(id, ref_location) for id in ids]

    def _get_base(self, id: str) -> str:
        if not self.config.base:
            raise MissingBaseConfig(id)
        return self.config.base
