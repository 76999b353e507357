# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import inspect
import os
from importlib import import_module
from pathlib import Path

# -- Project information -----------------------------------------------------

project = 'Artify-Database-Config'
copyright = '2025, Artify'
author = 'Artify'
release = 'v0.1'

# ---- Paths ----
# repo_root = new_docs/source/../../
REPO_ROOT = Path(__file__).resolve().parents[2]

GITHUB_ORG_REPO = os.environ.get("GITHUB_REPOSITORY", "ORG/REPO")
GIT_REF = os.environ.get("GITHUB_SHA", "main")

# -- General configuration ---------------------------------------------------

extensions = [
    "autoapi.extension",
    "sphinx.ext.napoleon",        # Google/NumPy docstrings
    "sphinx.ext.viewcode",        # source links
    "sphinx.ext.intersphinx",
    "sphinx_copybutton",
    "sphinx.ext.autosummary",
    "sphinx.ext.linkcode",
]

extensions += ["myst_parser"]

source_suffix = {
    ".rst": "restructuredtext",
    ".md": "markdown",
}

myst_enable_extensions = [
    "colon_fence",
    "deflist",
]

templates_path = ['_templates']
exclude_patterns = []

language = 'en'

html_show_sourcelink = True

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "sqlalchemy": ("https://docs.sqlalchemy.org/en/20/", None),
    "pydantic": ("https://docs.pydantic.dev/latest/", None),
}

# ── AutoAPI (artify package) ────────────────────────────────────────────────
autoapi_type = "python"
autoapi_dirs = ["../../artify"]
autoapi_add_toctree_entry = False
add_module_names = False
autoapi_keep_files = True
autoapi_python_use_implicit_namespaces = True
autoapi_root = "artify_api"
autoapi_options = [
    "members",
    "undoc-members",
    "show-inheritance",
    "show-module-summary",
    "imported-members",
    "show-source",
]
autoapi_member_order = "bysource"
autoapi_python_class_content = "class"
autoapi_generate_api_docs = True
autoapi_keep_module_path = False
autoapi_ignore = [
    "*__pycache__*",
]

# ---- Theme ----
html_theme = "sphinx_rtd_theme"
html_title = project

# Napoleon (Google/NumPy docstrings)
napoleon_google_docstring = True
napoleon_numpy_docstring = True


def linkcode_resolve(domain, info):
    """
    Map Python API docs to GitHub source:
    https://github.com/<org>/<repo>/blob/<ref>/<path>#L<start>-L<end>
    """
    if domain != 'py' or not info.get('module'):
        return None
    try:
        obj = import_module(info['module'])
        for part in info.get('fullname', '').split('.'):
            obj = getattr(obj, part)
        path = Path(inspect.getsourcefile(obj)).resolve()
        source, start = inspect.getsourcelines(obj)
    except (AttributeError, ImportError, OSError, TypeError):
        return None
    if REPO_ROOT not in path.parents:
        return None
    rel = path.relative_to(REPO_ROOT).as_posix()
    end = start + len(source) - 1
    return f"https://github.com/{GITHUB_ORG_REPO}/blob/{GIT_REF}/{rel}#L{start}-L{end}"
