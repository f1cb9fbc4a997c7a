"""Hotel listing API: generic async repository layer over SQLAlchemy with centralized error translation."""
