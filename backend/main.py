"""
FastAPI Backend for the Foundry Task Agent

Hosts the chat relay and the task list it works on.
"""

from fastapi import FastAPI, Depends, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import List, Optional
import structlog
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from backend.database import SessionLocal, init_db
from src.agents import FoundryConfig, FoundryTaskAgent
from src.tasks import TaskNotFoundError, TaskService

# Initialize logging
logger = structlog.get_logger()

# Initialize FastAPI app
app = FastAPI(
    title="Foundry Task Agent API",
    description="Chat relay to an Azure AI Foundry agent with a task list",
    version="0.1.0"
)

# CORS middleware (allow frontend to connect)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["http://localhost:3000", "http://localhost:5173"],  # Dev servers
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize services (singleton pattern)
task_service: Optional[TaskService] = None
foundry_agent: Optional[FoundryTaskAgent] = None


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    global task_service, foundry_agent

    logger.info("initializing_services")

    init_db()
    logger.info("database_initialized")

    task_service = TaskService(SessionLocal)

    # Config is resolved once here; the agent connects lazily on first message
    config = FoundryConfig.from_env()
    foundry_agent = FoundryTaskAgent(task_service, config=config)
    logger.info(
        "foundry_agent_created",
        config_complete=config.is_complete
    )


@app.on_event("shutdown")
async def shutdown_event():
    if foundry_agent is not None:
        await foundry_agent.cleanup()


def get_task_service() -> TaskService:
    if task_service is None:
        raise HTTPException(status_code=503, detail="Task service not initialized")
    return task_service


def get_agent() -> FoundryTaskAgent:
    if foundry_agent is None:
        raise HTTPException(status_code=503, detail="Agent not initialized")
    return foundry_agent


# Request/Response Models
class ChatRequest(BaseModel):
    """Chat request from the user."""
    message: str = Field(..., min_length=1)


class ChatResponse(BaseModel):
    """Assistant reply."""
    role: str
    content: str


class TaskCreateRequest(BaseModel):
    title: str
    description: Optional[str] = None


class TaskResponse(BaseModel):
    id: int
    title: str
    description: Optional[str]
    completed: bool
    created_at: str
    updated_at: str


# API Endpoints

@app.get("/")
async def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "service": "Foundry Task Agent API",
        "version": "0.1.0"
    }


@app.get("/health")
async def health_check():
    """Detailed health check."""
    return {
        "status": "healthy",
        "services": {
            "task_service": task_service is not None,
            "foundry_agent": foundry_agent is not None
        },
        "agent_state": foundry_agent.state.value if foundry_agent else None,
        "agent_configured": foundry_agent.config.is_complete if foundry_agent else False
    }


@app.post("/chat", response_model=ChatResponse)
async def chat(
    request: ChatRequest,
    agent: FoundryTaskAgent = Depends(get_agent)
):
    """
    Relay a user message to the Foundry agent.

    Always answers 200: agent failures come back as assistant fallback text.
    """
    logger.info("chat_request_received", message_length=len(request.message))

    reply = await agent.process_message(request.message)

    logger.info("chat_response_sent", response_length=len(reply.content))
    return ChatResponse(**reply.to_dict())


@app.get("/tasks", response_model=List[TaskResponse])
async def list_tasks(
    include_completed: bool = True,
    service: TaskService = Depends(get_task_service)
):
    return service.list_tasks(include_completed=include_completed)


@app.post("/tasks", response_model=TaskResponse, status_code=201)
async def create_task(
    request: TaskCreateRequest,
    service: TaskService = Depends(get_task_service)
):
    try:
        return service.create_task(request.title, request.description)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/tasks/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    service: TaskService = Depends(get_task_service)
):
    try:
        return service.get_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.post("/tasks/{task_id}/complete", response_model=TaskResponse)
async def complete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service)
):
    try:
        return service.complete_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.delete("/tasks/{task_id}", status_code=204)
async def delete_task(
    task_id: int,
    service: TaskService = Depends(get_task_service)
):
    try:
        service.delete_task(task_id)
    except TaskNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
