"""FastAPI application for richtext2md."""

from fastapi import FastAPI

from server.routers import convert_router

app = FastAPI(
    title="richtext2md",
    description="Convert Contentful rich text to Markdown.",
)
app.include_router(convert_router)
