"""
Modèle SQLAlchemy pour le fil des mises à jour quotidiennes.
La date est conservée en texte ISO (YYYY-MM-DD) : l'ordre lexical suit l'ordre chronologique.
"""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from schooladmin.database import Base


class DailyUpdate(Base):
    __tablename__ = "daily_updates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(String(10), nullable=False)
    category = Column(String(50), nullable=True)  # Nursery, LKG, UKG...
    content = Column(Text, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
