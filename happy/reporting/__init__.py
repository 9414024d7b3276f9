from .human import HumanReport as HumanReport
from .machine import MachineReport as MachineReport
from .output_lock import OutputLock as OutputLock
from .report import Report as Report
