import os
import sys
from datetime import datetime

sys.path.insert(0, os.path.abspath("../../src"))

project = "PySATL Binned"
copyright = f"{datetime.now().year}, Leonid Elkin, Mikhail Mikhailov"
author = "Leonid Elkin, Mikhail Mikhailov"
release = "0.1.0"

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.napoleon",
    "sphinx.ext.viewcode",
    "sphinx.ext.intersphinx",
    "sphinx.ext.mathjax",
    "sphinx_rtd_theme",
    "sphinx_autodoc_typehints",
]
templates_path = []
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store"]

# -- Napoleon (NumPy style docstrings) --
napoleon_google_docstring = False
napoleon_use_keyword = True
napoleon_numpy_docstring = True
napoleon_include_init_with_doc = True
napoleon_include_private_with_doc = False
napoleon_include_special_with_doc = True
napoleon_use_admonition_for_notes = True
napoleon_use_ivar = False
napoleon_use_param = True
napoleon_use_rtype = True
napoleon_preprocess_types = True

# -- Autodocumentation settings --
autodoc_default_options = {
    "member-order": "bysource",
    "undoc-members": True,
    "exclude-members": "__weakref__",
    "show-inheritance": True,
}

autodoc_typehints = "description"
autodoc_typehints_format = "short"

# -- Intersphinx --
intersphinx_mapping = {
    "python": ("https://docs.python.org/3", None),
    "numpy": ("https://numpy.org/doc/stable/", None),
    "scipy": ("https://docs.scipy.org/doc/scipy/", None),
}

# -- HTML --
html_theme = "sphinx_rtd_theme"
html_theme_options = {
    "collapse_navigation": False,
    "sticky_navigation": True,
    "navigation_depth": 4,
}

source_suffix = {
    ".rst": "restructuredtext",
}

suppress_warnings = [
    "ref.misc",
]

# forward references
autodoc_type_aliases = {
    "CdfState": "pysatl_binned.distributions.cdf_state.CdfState",
    "BinVector": "pysatl_binned.containers.protocol.BinVector",
    "Support": "pysatl_binned.distributions.support.Support",
    "Sample": "pysatl_binned.distributions.sampling.Sample",
    "FloatArray": "pysatl_binned.types.FloatArray",
    "IndexArray": "pysatl_binned.types.IndexArray",
    "NumericArray": "pysatl_binned.types.NumericArray",
    "BoolArray": "pysatl_binned.types.BoolArray",
    "Number": "pysatl_binned.types.Number",
}

nitpicky = False
