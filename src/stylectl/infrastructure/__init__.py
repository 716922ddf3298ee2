"""Infrastructure layer — compiler backends, artifact I/O, file watching.

This layer depends on stdlib and third-party libs (libsass, watchdog, pluggy).
It must never import from services, commands, or output.
"""
