from .module_manager import module_manager
