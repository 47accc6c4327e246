"""Install script executed inside the Debian source image.

The script is a bundled Jinja2 template (``data/templates``). apt-get cannot
be made reliably quiet, so it is left loud and only the last line of the
dpkg-query output is kept.
"""
from __future__ import annotations

import shlex
from functools import lru_cache

from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template

from trustpkg.data import get_data_path

VERSION_FILE = "version.txt"
BUNDLE_FILE = "ca-certificates.crt"
INSTALL_TEMPLATE = "install-ca-certificates.sh.j2"


@lru_cache(maxsize=1)
def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(get_data_path("templates"))),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["shquote"] = lambda value: shlex.quote(str(value))
    return env


def _template() -> Template:
    return _environment().get_template(INSTALL_TEMPLATE)


def render_install_script(
    install_target: str,
    *,
    package: str = "ca-certificates",
    bundle_path: str = "/etc/ssl/certs/ca-certificates.crt",
    workdir: str = "/workdir",
) -> str:
    """Render the bash script that installs ``install_target`` and exports results.

    The script writes the installed version to ``<workdir>/version.txt`` and
    copies the bundle to ``<workdir>/ca-certificates.crt``.
    """
    workdir = workdir.rstrip("/") or "/"
    return _template().render(
        install_target=install_target,
        package=package,
        version_file=f"{workdir}/{VERSION_FILE}",
        bundle_path=bundle_path,
        bundle_file=f"{workdir}/{BUNDLE_FILE}",
    )


__all__ = ["BUNDLE_FILE", "INSTALL_TEMPLATE", "VERSION_FILE", "render_install_script"]
