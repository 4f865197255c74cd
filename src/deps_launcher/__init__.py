"""deps-launcher — classpath-caching launcher for Clojure projects.

Resolves a classpath through the ``clojure.tools.deps`` scripts, caches
the result on disk and dispatches to exactly one terminal action.
"""

from deps_launcher.version import __version__

__all__: list[str] = ["__version__"]
