"""Target bands, thresholds and fixed text used by the treatment engine."""

# pH target band
PH_MIN = 7.2
PH_IDEAL = 7.4
PH_MAX = 7.6

# Total alkalinity target band (ppm)
ALKALINITY_MIN = 80
ALKALINITY_IDEAL = 100
ALKALINITY_MAX = 120

# Free chlorine target band (ppm)
CHLORINE_MIN = 1
CHLORINE_IDEAL = 2
CHLORINE_MAX = 3

# Calcium hardness target band (ppm)
HARDNESS_MIN = 200
HARDNESS_IDEAL = 300
HARDNESS_MAX = 400

# Shock chlorination: raise chlorine from zero by this many ppm
SHOCK_CHLORINE_INCREMENT = 12

# Below this free chlorine level (ppm) the sanitizer is considered depleted
CHLORINE_DEPLETED = 0.5

# Chlorine tablets
TABLET_SMALL_POOL_MAX_VOLUME = 10000
MINI_TABLET_NAME = "Chlorine mini tablet (20 g)"
MINI_TABLET_LITERS_PER_UNIT = 2000
LARGE_TABLET_NAME = "Chlorine large tablet (200 g)"
LARGE_TABLET_LITERS_PER_UNIT = 30000
TABLET_UNIT = "unit(s)"

# Placeholder for unit and wait duration on advisory steps
NO_VALUE = "-"

# Summaries by final status
SUMMARY_OK = "Your water is balanced and ready to use!"
SUMMARY_WARNING = "The water needs some adjustments to be ideal."
SUMMARY_CRITICAL = "Warning: critical conditions. Do not use the pool until it is treated."
