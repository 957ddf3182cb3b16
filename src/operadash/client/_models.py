from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping


def _str(data: Mapping[str, Any], *keys: str) -> str:
    for key in keys:
        value = data.get(key)
        if value is not None:
            return str(value)
    return ''


@dataclass
class ProcessDefinition:
    """A BPMN process definition from the engine REST API."""

    id: str = ''
    key: str = ''
    category: str = ''
    description: str = ''
    name: str = ''
    version: int = 0
    resource: str = ''
    deployment_id: str = ''
    diagram: str = ''
    suspended: bool = False
    tenant_id: str = ''

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> 'ProcessDefinition':
        try:
            version = int(data.get('version') or 0)
        except (TypeError, ValueError):
            version = 0
        return cls(
            id=_str(data, 'id'),
            key=_str(data, 'key'),
            category=_str(data, 'category'),
            description=_str(data, 'description'),
            name=_str(data, 'name'),
            version=version,
            resource=_str(data, 'resource'),
            deployment_id=_str(data, 'deploymentId'),
            diagram=_str(data, 'diagram'),
            suspended=bool(data.get('suspended', False)),
            tenant_id=_str(data, 'tenantId'),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'key': self.key,
            'category': self.category,
            'description': self.description,
            'name': self.name,
            'version': self.version,
            'resource': self.resource,
            'deploymentId': self.deployment_id,
            'diagram': self.diagram,
            'suspended': self.suspended,
            'tenantId': self.tenant_id,
        }


@dataclass
class ProcessInstance:
    """A BPMN process instance from the engine REST API."""

    id: str = ''
    definition_id: str = ''
    business_key: str = ''
    case_instance_id: str = ''
    ended: bool = False
    suspended: bool = False
    tenant_id: str = ''
    start_time: str = ''
    end_time: str = ''

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> 'ProcessInstance':
        return cls(
            id=_str(data, 'id'),
            definition_id=_str(data, 'definitionId', 'processDefinitionId'),
            business_key=_str(data, 'businessKey'),
            case_instance_id=_str(data, 'caseInstanceId'),
            ended=bool(data.get('ended', False)),
            suspended=bool(data.get('suspended', False)),
            tenant_id=_str(data, 'tenantId'),
            start_time=_str(data, 'startTime'),
            end_time=_str(data, 'endTime'),
        )

    def to_record(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'definitionId': self.definition_id,
            'processDefinitionId': self.definition_id,
            'businessKey': self.business_key,
            'caseInstanceId': self.case_instance_id,
            'ended': self.ended,
            'suspended': self.suspended,
            'tenantId': self.tenant_id,
            'startTime': self.start_time,
            'endTime': self.end_time,
        }


@dataclass
class Variable:
    """A process instance variable."""

    name: str
    value: Any = None
    type: str = ''

    @classmethod
    def from_json(cls, name: str, data: Any) -> 'Variable':
        if not isinstance(data, Mapping):
            return cls(name=name, value=data)
        return cls(name=name, value=data.get('value'), type=_str(data, 'type'))

    def to_record(self) -> Dict[str, Any]:
        return asdict(self)
