"""cmdtimer - run a command N times, time it, and list Riot / League processes."""

__version__ = "0.1.0"
