"""Exception types raised across the agent"""


class AgentError(Exception):
    """Base class for agent errors"""


class ArtifactError(AgentError):
    """Step artifacts are missing, malformed, or cannot be serialized"""


class ContentGenerationError(AgentError):
    """The content generator failed or returned unusable output"""


class OrchestrationError(AgentError):
    """The orchestration service could not be reached or rejected a request"""


class WorkflowError(AgentError, ValueError):
    """Unknown or inconsistent workflow configuration"""
