"""Find the npm packages a JavaScript project imports but lacks, and install them."""

__version__ = "0.1.0"
