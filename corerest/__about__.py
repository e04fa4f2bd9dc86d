__version__ = "0.1.0"
__description__ = "corerest : embedded rendering and CRUD transformation for Flask-SQLAlchemy REST services"
