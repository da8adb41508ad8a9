"""ezpresso -- Express + TypeScript project scaffolding.

Bootstraps new project skeletons and generates controllers, services,
mongoose models and routers from Jinja2 templates.
"""

__version__ = "0.1.0"
