"""
Diagram Graph Backend - FastAPI Application

This is the main entry point for the diagram graph backend.
It provides:
- REST API for graph operations (CRUD for vertices/edges)
- Traversal, distance and layout endpoints
- Validation and summary endpoints
- WebSocket endpoint for real-time updates
- CORS configuration for local frontend development
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, WebSocket, WebSocketDisconnect, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware

from diagram_core import (
    CreateVertexRequest, UpdateVertexRequest,
    CreateEdgeRequest, LayoutRequest,
    MissingEndpointError, TraversalMode, TraversalOrder,
)
from diagram_core.validation import validation_summary

from .config import get_settings, configure_logging
from .graph_manager import graph_manager
from .websocket_manager import ws_manager

logger = logging.getLogger(__name__)


# --- Async change notification ---
# Bridge between sync GraphManager callbacks and async WebSocket broadcasts

_change_event: asyncio.Event | None = None


def on_graph_change():
    """Callback for graph changes - sets event for async handler."""
    if _change_event is not None:
        _change_event.set()


async def change_broadcaster(event: asyncio.Event):
    """Background task that broadcasts changes to WebSocket clients."""
    while True:
        await event.wait()
        event.clear()

        graph = graph_manager.graph
        await ws_manager.notify_graph_updated(graph.vertex_count, graph.edge_count)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan handler for startup/shutdown tasks."""
    global _change_event
    configure_logging(get_settings())

    # Event is bound to the running loop, so it is created per startup
    _change_event = asyncio.Event()
    graph_manager.on_change(on_graph_change)

    # Start background broadcaster
    broadcaster_task = asyncio.create_task(change_broadcaster(_change_event))
    logger.info("Diagram graph backend started")

    yield

    # Cleanup
    graph_manager.remove_on_change(on_graph_change)
    _change_event = None
    broadcaster_task.cancel()
    try:
        await broadcaster_task
    except asyncio.CancelledError:
        pass


# --- FastAPI App ---

app = FastAPI(
    title="Diagram Graph API",
    description="Backend API for the diagram editor's graph model",
    version="1.0.0",
    lifespan=lifespan
)

# CORS for local development
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# --- Health Check ---

@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok", "connections": ws_manager.connection_count}


# --- Graph State ---

@app.get("/api/graph")
async def get_graph():
    """Get the current graph state."""
    return graph_manager.get_state()


@app.post("/api/graph/new")
async def new_graph(name: str = Query(default="Untitled Graph")):
    """Drop the current graph and start an empty one."""
    graph_manager.new_graph(name=name)
    return {"success": True, "graph": graph_manager.get_state()}


# --- Vertex Operations ---

@app.post("/api/vertices")
async def create_vertex(request: CreateVertexRequest):
    """Create a new vertex."""
    vertex = graph_manager.add_vertex(**request.model_dump())
    return {"success": True, "vertex": vertex.model_dump()}


@app.get("/api/vertices/{vertex_id}")
async def get_vertex(vertex_id: str):
    """Get a specific vertex."""
    vertex = graph_manager.get_vertex(vertex_id)
    if vertex:
        return {"success": True, "vertex": vertex.model_dump()}
    raise HTTPException(status_code=404, detail="Vertex not found")


@app.patch("/api/vertices/{vertex_id}")
async def update_vertex(vertex_id: str, request: UpdateVertexRequest):
    """Update a vertex."""
    vertex = graph_manager.update_vertex(vertex_id, **request.model_dump())
    if vertex:
        return {"success": True, "vertex": vertex.model_dump()}
    raise HTTPException(status_code=404, detail="Vertex not found")


@app.delete("/api/vertices/{vertex_id}")
async def delete_vertex(vertex_id: str):
    """Delete a vertex and its connected edges."""
    if graph_manager.delete_vertex(vertex_id):
        return {"success": True}
    raise HTTPException(status_code=404, detail="Vertex not found")


@app.get("/api/vertices/{vertex_id}/edges")
async def get_vertex_edges(vertex_id: str):
    """Get the edges incident to a vertex."""
    edges = graph_manager.get_edges_for_vertex(vertex_id)
    if edges is None:
        raise HTTPException(status_code=404, detail="Vertex not found")
    return {"success": True, "edges": [e.to_json_dict() for e in edges]}


@app.get("/api/vertices/{vertex_id}/adjacent")
async def get_adjacent_vertices(vertex_id: str):
    """Get the neighbour across each edge of a vertex."""
    vertices = graph_manager.get_adjacent_vertices(vertex_id)
    if vertices is None:
        raise HTTPException(status_code=404, detail="Vertex not found")
    return {"success": True, "vertices": [v.model_dump() for v in vertices]}


# --- Edge Operations ---

@app.post("/api/edges")
async def create_edge(request: CreateEdgeRequest):
    """Create a new edge."""
    try:
        edge = graph_manager.add_edge(
            source=request.source,
            target=request.target,
            label=request.label,
            color=request.color
        )
        return {"success": True, "edge": edge.to_json_dict()}
    except MissingEndpointError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/api/edges/{edge_id}")
async def get_edge(edge_id: str):
    """Get a specific edge."""
    edge = graph_manager.get_edge(edge_id)
    if edge:
        return {"success": True, "edge": edge.to_json_dict()}
    raise HTTPException(status_code=404, detail="Edge not found")


@app.delete("/api/edges/{edge_id}")
async def delete_edge(edge_id: str):
    """Delete an edge."""
    if graph_manager.delete_edge(edge_id):
        return {"success": True}
    raise HTTPException(status_code=404, detail="Edge not found")


# --- Algorithms ---

@app.get("/api/traversal")
async def traversal(
    start: int = Query(default=0),
    order: TraversalOrder = Query(default=TraversalOrder.BREADTH_FIRST),
    mode: TraversalMode = Query(default=TraversalMode.UNDIRECTED)
):
    """
    Walk the graph from the vertex at position `start`.

    An out-of-range start yields an empty vertex list.
    """
    vertices = graph_manager.traverse(start, order, mode)
    return {
        "success": True,
        "order": order.value,
        "mode": mode.value,
        "vertices": [v.model_dump() for v in vertices]
    }


@app.get("/api/distance")
async def distance(origin: str = Query(...), destination: str = Query(...)):
    """
    Hop distance between two vertices.

    0 is returned both for origin == destination and for unreachable pairs.
    """
    hops = graph_manager.distance(origin, destination)
    if hops is None:
        raise HTTPException(status_code=404, detail="Vertex not found")
    return {"success": True, "origin": origin, "destination": destination, "distance": hops}


@app.post("/api/layout")
async def layout(request: LayoutRequest):
    """Arrange the vertices with a layout strategy."""
    try:
        changed = graph_manager.auto_layout(strategy=request.strategy, root=request.root)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"success": changed, "graph": graph_manager.get_state()}


# --- Analysis & Validation ---

@app.get("/api/graph/validate")
async def validate_current_graph():
    """
    Validate the current graph for structural issues.

    Returns a list of issues (errors, warnings, info) and a summary.
    """
    issues = graph_manager.validate()
    return {
        "success": True,
        "issues": [issue.to_dict() for issue in issues],
        "summary": validation_summary(issues)
    }


@app.get("/api/graph/summary")
async def summarize_current_graph():
    """
    Get a structural summary of the current graph.

    Returns vertex counts by shape, connected components, and most
    connected vertices.
    """
    return {
        "success": True,
        "summary": graph_manager.summarize().to_dict()
    }


# --- WebSocket ---

@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """
    WebSocket endpoint for real-time updates.

    Clients connect here to receive sequenced graph_updated events and
    may send "ping" to learn the current sequence number.
    """
    await ws_manager.connect(websocket)

    try:
        while True:
            data = await websocket.receive_text()
            await ws_manager.handle_message(websocket, data)
    except WebSocketDisconnect:
        await ws_manager.disconnect(websocket)


def run():
    """Run the backend with uvicorn using the configured host and port."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())


# --- Run with uvicorn ---

if __name__ == "__main__":
    run()
