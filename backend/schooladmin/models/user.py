"""
Modèle SQLAlchemy pour les comptes (admin, manager, élève).

Le mot de passe est stocké en clair et le rôle reste du texte libre en base :
la validation du rôle se fait à l'entrée de l'API (schemas.user.Role).
"""

from sqlalchemy import Column, ForeignKey, Integer, String

from schooladmin.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String(100), unique=True, nullable=False)
    password = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False)  # admin, manager, student
    branch_id = Column(Integer, ForeignKey("branches.id"), nullable=True)
    student_id = Column(Integer, ForeignKey("students.id"), nullable=True)
