"""
Deployment errors
"""


class DeploymentError(Exception):
    """Raised when any step of a contract deployment fails"""


class ArtifactError(DeploymentError):
    """Raised when a compiled contract artifact cannot be resolved"""
