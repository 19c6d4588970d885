"""Todos — validated todo list with per-instance greeting.

Each process greets with its own id, so responses show which replica
behind a load balancer answered.

GET /            "Hello world from <server id>!"
GET /todos       every todo as a JSON array
GET /todos/:id   one todo, 404 "Todo not found" when missing
POST /todos      {"item": "..."}; 400 on invalid JSON or empty item

Run:
    cd examples/todos && python app.py
"""

import uuid

from waypoint import App, AppConfig, ListStore, MalformedRequestBody, text_response

SERVER_ID = str(uuid.uuid4())

app = App(AppConfig.from_env())

# Todo text by id; the id is the store index.
todos: ListStore[str] = ListStore()


@app.get("/")
def root(request, params):
    return f"Hello world from {SERVER_ID}!"


@app.get("/todos")
def list_todos(request, params):
    return [{"id": i, "item": item} for i, item in enumerate(todos.all())]


@app.get("/todos/:id")
def get_todo(request, params):
    item = todos.get(params["id"])
    if item is None:
        return text_response("Todo not found", status=404)
    return {"id": int(params["id"]), "item": item}


@app.post("/todos")
async def add_todo(request, params):
    try:
        body = await request.json()
    except MalformedRequestBody:
        return text_response("Invalid JSON", status=400)

    item = body.get("item") if isinstance(body, dict) else None
    if not isinstance(item, str) or not item.strip():
        return text_response("Missing or empty 'item' field", status=400)

    todos.append(item.strip())
    return "Todo added successfully"


if __name__ == "__main__":
    app.run()
