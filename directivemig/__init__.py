"""directivemig - migrate legacy `//` test directives to the explicit `//@` form."""

__version__ = "0.1.0"
