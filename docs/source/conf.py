# Configuration file for the Sphinx documentation builder.
#
# For the full list of built-in configuration values, see the documentation:
# https://www.sphinx-doc.org/en/master/usage/configuration.html

from datetime import datetime

from svg_slim import __version__ as version

# -- Project information -----------------------------------------------------

project = "svg-slim"
author = "svg-slim contributors"
copyright = f"{datetime.now().year}, {author}"
release = version

# -- General configuration ---------------------------------------------------
extensions = [
    "autoapi.extension",
    "sphinx.ext.autodoc",
    "sphinx.ext.viewcode",
]

templates_path = ["_templates"]
exclude_patterns = []

autodoc_member_order = "bysource"
autodoc_typehints = "description"

autoapi_dirs = ["../../src"]
autoapi_add_toctree_entry = False
autoapi_ignore = ["*/__main__.py"]

python_use_unqualified_type_names = True

# -- Options for HTML output -------------------------------------------------

html_theme = "furo"
html_static_path = ["_static"]
