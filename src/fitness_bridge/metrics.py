"""Prometheus metrics for the sensor bridge"""
from prometheus_client import Counter, Gauge

# Counters
samples_processed = Counter(
    'fitness_motion_samples_processed_total',
    'Accelerometer samples run through the motion classifier'
)

samples_dropped = Counter(
    'fitness_stream_items_dropped_total',
    'Items dropped because a subscription queue was full',
    ['stream']
)

steps_detected = Counter(
    'fitness_steps_detected_total',
    'Rising-edge steps detected'
)

falls_detected = Counter(
    'fitness_falls_detected_total',
    'Fall alerts raised after cooldown'
)

motion_updates_emitted = Counter(
    'fitness_motion_updates_emitted_total',
    'Throttled motion update events emitted'
)

location_fixes_relayed = Counter(
    'fitness_location_fixes_relayed_total',
    'Location fixes relayed to subscribers'
)

# Gauges
active_subscriptions = Gauge(
    'fitness_active_subscriptions',
    'Open event stream subscriptions',
    ['stream']
)
