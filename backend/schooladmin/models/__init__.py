# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant create_all et avant que SQLAlchemy résolve les clés étrangères inter-modèles
# (users.student_id → students.id, daily_updates.created_by → users.id).

from schooladmin.models.branch import Branch  # noqa: F401
from schooladmin.models.student import Student  # noqa: F401
from schooladmin.models.user import User  # noqa: F401
from schooladmin.models.daily_update import DailyUpdate  # noqa: F401
