"""CPU power mode switching over cpufreq governors."""

__version__ = "0.1.0"
