# This file is boilerplate. Copy it to any new projects you create.
# Its' purpose is to call the launcher that exists as part of `logs_thunder`.
# From there, the appropriate module to run is extracted from the stack name,
# e.g. the `logs-archives` stack runs `logs_thunder/modules/datadog/logs_archives`.
from logs_thunder.launcher import run_active_stack

run_active_stack("datadog")
