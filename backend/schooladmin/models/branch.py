"""
Modèle SQLAlchemy pour les branches (campus physiques de l'école).
"""

from sqlalchemy import Column, Integer, String

from schooladmin.database import Base


class Branch(Base):
    __tablename__ = "branches"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), unique=True, nullable=False)
    location = Column(String(255), nullable=True)
