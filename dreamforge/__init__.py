__version__ = "1.0.0"

# Stamped into every manifest so builds can be traced to the pipeline that made them.
ENGINE_VERSION = __version__
