# Custom exceptions for dexhierarchy

class HierarchyError(Exception):
    """Base exception for all application-specific errors."""
    pass

class MissingReceiverError(HierarchyError):
    """Raised when a virtual method has no leading receiver parameter."""
    def __init__(self, class_type: str, method_name: str):
        self.class_type = class_type
        self.method_name = method_name
        super().__init__(
            f"Virtual method {class_type}->{method_name} has no receiver parameter"
        )

class ConfigError(HierarchyError):
    """Raised for configuration-related problems."""
    pass
