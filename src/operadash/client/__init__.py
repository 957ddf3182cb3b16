from ._engine_client import EngineClient
from ._errors import EngineError
from ._models import ProcessDefinition, ProcessInstance, Variable

__all__ = ["EngineClient", "EngineError", "ProcessDefinition", "ProcessInstance", "Variable"]
