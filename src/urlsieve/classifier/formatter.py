"""Format strings for URLs.

A format string is a little like a special sprintf for URLs: each
``%`` followed by a directive character is replaced by a field of the
URL, everything else is copied through. For ``http://example.com/path``
and the format ``%d%p`` the result is ``example.com/path``.

Directives:
    %%  a literal percent character
    %s  the scheme; e.g. https
    %u  the userinfo; e.g. user:pass
    %d  the domain; e.g. sub.example.com
    %P  the port; e.g. 8080
    %S  the subdomain; e.g. www
    %r  the root domain; e.g. example
    %t  the TLD; e.g. com
    %p  the path; e.g. /users
    %e  the path's file extension; e.g. jpg
    %q  the raw query string; e.g. a=1&b=2
    %f  the fragment; e.g. section-1
    %@  an @ if there is userinfo
    %:  a colon if there is a port
    %?  a question mark if there is a query string
    %#  a hash if there is a fragment
    %a  the authority; shorthand for %u%@%d%:%P

Unknown directives are copied through untouched, including the ``%``.
"""

from typing import Callable

from urlsieve.classifier.parser import URLView


AUTHORITY_FORMAT = "%u%@%d%:%P"


def _authority(view: URLView) -> str:
    return render(view, AUTHORITY_FORMAT)


DIRECTIVES: dict[str, Callable[[URLView], str]] = {
    "%": lambda view: "%",
    "s": lambda view: view.scheme,
    "u": lambda view: view.userinfo,
    "d": lambda view: view.hostname,
    "P": lambda view: view.port,
    "S": lambda view: view.subdomain,
    "r": lambda view: view.root,
    "t": lambda view: view.tld,
    "p": lambda view: view.path,
    "e": lambda view: view.extension,
    "q": lambda view: view.raw_query,
    "f": lambda view: view.fragment,
    "@": lambda view: "@" if view.has_userinfo else "",
    ":": lambda view: ":" if view.has_port else "",
    "?": lambda view: "?" if view.has_query else "",
    "#": lambda view: "#" if view.has_fragment else "",
    "a": _authority,
}


def render(view: URLView, directives: str) -> str:
    """Render a format string against a URL view.

    Never fails: unknown directives and a trailing lone ``%`` are
    copied through literally.

    Args:
        view: URL to render
        directives: Format string, e.g. ``%s://%d%p``

    Returns:
        Rendered string
    """
    out: list[str] = []
    in_directive = False

    for ch in directives:
        if not in_directive:
            if ch == "%":
                in_directive = True
            else:
                out.append(ch)
            continue

        handler = DIRECTIVES.get(ch)
        if handler is None:
            out.append("%" + ch)
        else:
            out.append(handler(view))
        in_directive = False

    if in_directive:
        out.append("%")

    return "".join(out)


def render_all(view: URLView, directives: str) -> list[str]:
    """Render a format string, returning every produced value.

    Every directive currently yields exactly one value, so the list has a
    single element. Callers loop over it.
    """
    return [render(view, directives)]
