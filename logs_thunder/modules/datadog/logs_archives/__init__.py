from .logs_archives import LogsArchives
