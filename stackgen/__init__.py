"""stackgen -- local development stack generator.

Turns a declarative project (datastores, runtimes, a name) into a Docker
Compose file, ``.env`` / ``.env.example``, a ``.gitignore`` and one
Dockerfile per runtime.
"""

__version__ = "1.0.0"
