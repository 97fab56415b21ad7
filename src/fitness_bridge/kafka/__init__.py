"""
Kafka publication for the fitness bridge
"""

from fitness_bridge.kafka.producer import EventProducer, KafkaEventSink

__all__ = ["EventProducer", "KafkaEventSink"]
