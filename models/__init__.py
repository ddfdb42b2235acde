from config.database import Base
from .file import PhysicalFile, UserFile

__all__ = ['Base', 'PhysicalFile', 'UserFile']
