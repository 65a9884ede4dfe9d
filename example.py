import json
import logging
import wsgiref.simple_server

import hmux

items = ["kettle", "mug"]

def get_items_json(response, request):
    response.set_header("Content-Type", "application/json")
    response.write(json.dumps(items))

def get_items_text(response, request):
    response.set_header("Content-Type", "text/plain; charset=utf-8")
    response.write("\n".join(items))

def add_item_json(response, request):
    body = request.body_stream.read(request.content_length)
    items.append(json.loads(body.decode("utf-8")))
    response.set_status(201)

def add_item_text(response, request):
    body = request.body_stream.read(request.content_length)
    items.append(body.decode("utf-8").strip())
    response.set_status(201)

application = hmux.Application(hmux.Method({
    "GET": hmux.Accept({
        "application/json": get_items_json,
        "text/plain": get_items_text,
    }),
    "POST": hmux.ContentType({
        "application/json": add_item_json,
        "text/*": add_item_text,
    }),
}))

if __name__ == "__main__":
    logging.basicConfig(level=logging.DEBUG)
    httpd = wsgiref.simple_server.make_server('', 8000, application)
    httpd.serve_forever()
