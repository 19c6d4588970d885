"""Items — the in-memory items service.

GET /            greeting
GET /items       every item as a JSON array
GET /items/:id   one item by its zero-based index
POST /items      append the JSON body, answer "OK"

Run:
    cd examples/items && python app.py
"""

from waypoint import App, AppConfig, ListStore, MalformedRequestBody, json_response, text_response

app = App(AppConfig.from_env())

items: ListStore[dict] = ListStore()


@app.get("/")
def root(request, params):
    return "Hello world at root!"


@app.get("/items")
def list_items(request, params):
    return json_response(items.all())


@app.get("/items/:id")
def get_item(request, params):
    item = items.get(params["id"])
    if item is None:
        return text_response("Item not found", status=404)
    return json_response(item)


@app.post("/items")
async def add_item(request, params):
    try:
        item = await request.json()
    except MalformedRequestBody:
        return text_response("Invalid JSON", status=400)
    items.append(item)
    return text_response("OK")


if __name__ == "__main__":
    app.run()
