"""Path canonicalization utilities."""

from typing import List
import re

from modloader.errors import InvalidPath


# 'http://a//b/c' ==> 'http://a/b/c', 'file:///a/b' is left alone
_DUPLICATE_SLASHES = re.compile(r'([^:/])/+')
_HOST = re.compile(r'^(\w+://[^/]*)/?.*$')
_KNOWN_EXTENSION = re.compile(r'\.(?:css|js)$')


def dirname(path: str) -> str:
    """Extract the directory portion of a path.

    dirname('a/b/c.js') ==> 'a/b/'
    dirname('d.js') ==> './'
    """
    index = path.rfind('/')
    if index == -1:
        return './'
    return path[:index + 1]


def realpath(path: str) -> str:
    """Canonicalize a path.

    realpath('./a//b/../c') ==> 'a/c'

    Raises:
        InvalidPath: if a '..' segment climbs above the first segment
    """
    path = _DUPLICATE_SLASHES.sub(r'\1/', path)

    # 'a/b/c', nothing to walk
    if '.' not in path:
        return path

    resolved: List[str] = []
    for part in path.split('/'):
        if part == '..':
            if not resolved:
                raise InvalidPath(path)
            resolved.pop()
        elif part != '.':
            resolved.append(part)

    return '/'.join(resolved)


def normalize(url: str) -> str:
    """Normalize a location, adding the default '.js' extension.

    A trailing '#' suppresses the extension and is stripped. Urls with a
    query string or an existing .css/.js extension are left as they are.
    """
    url = realpath(url)

    if url.endswith('#'):
        return url[:-1]

    if '?' not in url and not _KNOWN_EXTENSION.search(url):
        url += '.js'

    return url


def get_host(url: str) -> str:
    """Get the scheme://authority portion of a url."""
    match = _HOST.match(url)
    return match.group(1) if match else url


def normalize_pathname(pathname: str) -> str:
    """Make sure a pathname starts with '/'."""
    if not pathname.startswith('/'):
        pathname = '/' + pathname
    return pathname


def is_absolute_path(id: str) -> bool:
    """Check whether an id is absolute (has a scheme or is protocol-relative)."""
    return '://' in id or id.startswith('//')


class PathCanonicalizer:
    """Canonicalizes and normalizes module locations."""

    def canonicalize(self, path: str) -> str:
        """Canonicalize a path without touching its extension."""
        return realpath(path)

    def normalize(self, url: str) -> str:
        """Canonicalize a location and apply the extension rules."""
        return normalize(url)

    def dirname(self, path: str) -> str:
        return dirname(path)

    def get_host(self, url: str) -> str:
        return get_host(url)

    def normalize_pathname(self, pathname: str) -> str:
        return normalize_pathname(pathname)

    def is_absolute(self, id: str) -> bool:
        return is_absolute_path(id)
