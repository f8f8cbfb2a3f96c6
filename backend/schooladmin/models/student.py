"""
Modèle SQLAlchemy pour la table students.

fees_due est une colonne générée par le moteur (fees_total - fees_paid) :
VIRTUAL sous SQLite, STORED sous PostgreSQL. Elle n'est jamais écrite par l'application.
"""

from sqlalchemy import Column, Computed, ForeignKey, Integer, String

from schooladmin.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(150), nullable=False)
    parent_phone = Column(String(30), nullable=True)
    fees_total = Column(Integer, nullable=False, default=0, server_default="0")
    fees_paid = Column(Integer, nullable=False, default=0, server_default="0")
    fees_due = Column(Integer, Computed("fees_total - fees_paid"))
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True)
    photo_url = Column(String(500), nullable=True)
    report_card_url = Column(String(500), nullable=True)
    class_grade = Column(String(50), nullable=True)  # Nursery, LKG, UKG...
