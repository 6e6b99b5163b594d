# Configuration file for the Sphinx documentation builder.
#
# windchime documentation

import os
import sys

# Allow Sphinx to import the windchime package
sys.path.insert(0, os.path.abspath(".."))

# -- Project information -----------------------------------------------------
import windchime  # noqa: E402

project = "windchime"
copyright = "2025, windchime"
author = "windchime"
release = windchime.__version__
version = ".".join(release.split(".")[:2])

# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
]

templates_path = ["_templates"]
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# -- Options for HTML output -------------------------------------------------
# Use sphinx_rtd_theme if installed (pip install sphinx-rtd-theme), else default
try:
    import sphinx_rtd_theme  # noqa: F401
    html_theme = "sphinx_rtd_theme"
except ImportError:
    html_theme = "alabaster"
html_static_path = ["_static"]
html_title = f"windchime {release}"

# -- Extension configuration -------------------------------------------------
autodoc_default_options = {
    "members": True,
    "member-order": "bysource",
    "show-inheritance": True,
}
# Signatures stay short; dataclass fields and hints go in the description
autodoc_typehints = "description"
autodoc_class_signature = "separated"
add_module_names = False
# Plotting helpers import matplotlib lazily; mock it for doc builds without it
autodoc_mock_imports = ["matplotlib"]

intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "matplotlib": ("https://matplotlib.org/stable/", None),
}

napoleon_google_docstring = True
napoleon_numpy_docstring = False
napoleon_use_rtype = False
