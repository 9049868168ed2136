# Carrega módulos para registrar tabelas no metadata:
from tutordesk.db.base import Base  # noqa: F401

import tutordesk.models.admin      # noqa: F401
import tutordesk.models.teacher    # noqa: F401
import tutordesk.models.student    # noqa: F401
import tutordesk.models.payment    # noqa: F401
import tutordesk.models.counter    # noqa: F401

__all__: list[str] = []
