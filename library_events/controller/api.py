"""
FastAPI application accepting library events.

Validates inbound events and hands valid ones to the Kafka publisher.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse

from library_events.common.exceptions import PublishError
from library_events.controller.errors import format_validation_errors
from library_events.domain.models import LibraryEvent, LibraryEventType
from library_events.kafka.config import KafkaConfig
from library_events.kafka.producer import KafkaProducer
from library_events.kafka.publisher import LibraryEventsPublisher
from library_events.kafka.topics import TopicManager

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

producer: Optional[KafkaProducer] = None
publisher: Optional[LibraryEventsPublisher] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan - startup and shutdown."""
    global producer, publisher

    # Startup
    logger.info("Starting library events producer service")

    config = KafkaConfig()
    if not TopicManager(config).ensure_topic_exists(config.topic):
        logger.warning(f"Topic '{config.topic}' is not available, sends may fail")

    producer = KafkaProducer(config)
    producer.start()
    publisher = LibraryEventsPublisher(producer, config)

    yield

    # Shutdown
    logger.info("Shutting down library events producer service")
    if producer:
        producer.close()


app = FastAPI(
    title="Library Events Producer API",
    description="REST API publishing library catalog events to Kafka",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Map invalid events to 400 with one item per invalid field."""
    message = format_validation_errors(exc.errors())
    logger.info(f"Rejected invalid library event on {request.method} {request.url.path}: {message}")
    return PlainTextResponse(message, status_code=status.HTTP_400_BAD_REQUEST)


@app.exception_handler(PublishError)
async def publish_exception_handler(request: Request, exc: PublishError):
    """Serialization and send failures are server errors."""
    logger.error(f"Failed to publish library event in {request.method} {request.url}: {exc}", exc_info=True)

    error_response = {
        "error_code": "PUBLISH_ERROR",
        "message": "The library event could not be published",
        "details": str(exc),
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=error_response)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "library-events-producer"}


# Sync handlers run in the threadpool; a full producer queue blocks for up to send_timeout
@app.post("/v1/libraryevent", status_code=status.HTTP_201_CREATED)
def post_library_event(library_event: LibraryEvent):
    """Publish a NEW library event."""
    logger.info(f"Received library event: {library_event}")

    if library_event.library_event_type != LibraryEventType.NEW:
        return PlainTextResponse("Only NEW event type is supported", status_code=status.HTTP_400_BAD_REQUEST)

    publisher.publish_with_headers(library_event)
    logger.info("Library event handed to the publisher")
    return library_event.model_dump(mode="json", by_alias=True)


@app.put("/v1/libraryevent", status_code=status.HTTP_200_OK)
def put_library_event(library_event: LibraryEvent):
    """Publish an UPDATE library event for an existing libraryEventId."""
    logger.info(f"Received library event update: {library_event}")

    if library_event.library_event_id is None:
        return PlainTextResponse("Please pass the LibraryEventId", status_code=status.HTTP_400_BAD_REQUEST)
    if library_event.library_event_type != LibraryEventType.UPDATE:
        return PlainTextResponse("Only UPDATE event type is supported", status_code=status.HTTP_400_BAD_REQUEST)

    publisher.publish_with_headers(library_event)
    return library_event.model_dump(mode="json", by_alias=True)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("library_events.controller.api:app", host="0.0.0.0", port=8080, log_level="info")
