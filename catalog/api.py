import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import Depends, FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from catalog.book import Book
from catalog.config import configure_logging, settings
from catalog.database import initialize_database
from catalog.exceptions import BookNotFoundError, BookValidationError
from catalog.library import Library
from catalog.store import BookStore

logger = logging.getLogger(__name__)

STATIC_DIR = Path(__file__).parent / "static"

# Set by the lifespan handler; read through get_library().
library: Optional[Library] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    global library
    configure_logging()
    seeded = initialize_database(settings.database_file, seed=settings.seed_database)
    logger.info("Database ready at %s (%d example books seeded)", settings.database_file, seeded)
    library = Library(BookStore(settings.database_file))
    yield
    if library:
        library.close()
        library = None


app = FastAPI(title=settings.app_name, version=settings.app_version, lifespan=lifespan)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_library() -> Library:
    if library is None:
        raise RuntimeError("Library is not initialized; the application has not started")
    return library


# --- Models ---
class BookInModel(BaseModel):
    title: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None


class BookModel(BaseModel):
    id: int
    title: str
    author: str
    description: Optional[str] = None
    createdAt: str
    updatedAt: Optional[str] = None

    @classmethod
    def from_book(cls, book: Book) -> "BookModel":
        return cls(
            id=book.id,
            title=book.title,
            author=book.author,
            description=book.description,
            createdAt=book.created_at.isoformat(),
            updatedAt=book.updated_at.isoformat() if book.updated_at else None,
        )


class DeletedModel(BaseModel):
    message: str
    id: int


# --- Error responses ---
def _not_found(e: BookNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"message": str(e)})


def _invalid(e: BookValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content=e.errors)


def _server_error(action: str, e: Exception) -> JSONResponse:
    logger.error("Error occurred while %s: %s", action, e)
    return JSONResponse(
        status_code=500,
        content={"message": f"An error occurred while {action}", "error": str(e)},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """Report malformed requests as 400 with a field -> message mapping."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        loc = list(error.get("loc", ()))
        if error.get("type") == "json_invalid" or len(loc) < 2:
            field = "body"
        else:
            field = "id" if loc[1] == "book_id" else str(loc[1])
        errors.setdefault(field, error.get("msg", "Invalid value"))
    return JSONResponse(status_code=400, content=errors)


# --- API Endpoints ---
@app.get("/books", response_model=List[BookModel], response_model_exclude_none=True)
def get_books(lib: Library = Depends(get_library)):
    """Get all books in insertion order."""
    try:
        books = lib.list_books()
    except Exception as e:
        return _server_error("retrieving books", e)
    return [BookModel.from_book(b) for b in books]


@app.get("/books/{book_id}", response_model=BookModel, response_model_exclude_none=True)
def get_book(book_id: int, lib: Library = Depends(get_library)):
    """Get a single book by id."""
    try:
        book = lib.get_book(book_id)
    except BookNotFoundError as e:
        return _not_found(e)
    except Exception as e:
        return _server_error("retrieving the book", e)
    return BookModel.from_book(book)


@app.post("/books", status_code=201, response_model=BookModel, response_model_exclude_none=True)
def create_book(payload: BookInModel, response: Response, lib: Library = Depends(get_library)):
    """Create a book; the Location header points at the new record."""
    try:
        book = lib.create_book(payload.title, payload.author, payload.description)
    except BookValidationError as e:
        return _invalid(e)
    except Exception as e:
        return _server_error("creating the book", e)
    response.headers["Location"] = app.url_path_for("get_book", book_id=book.id)
    return BookModel.from_book(book)


@app.put("/books/{book_id}", response_model=BookModel, response_model_exclude_none=True)
def update_book(book_id: int, payload: BookInModel, lib: Library = Depends(get_library)):
    """Replace title, author and description of an existing book."""
    try:
        book = lib.update_book(book_id, payload.title, payload.author, payload.description)
    except BookValidationError as e:
        return _invalid(e)
    except BookNotFoundError as e:
        return _not_found(e)
    except Exception as e:
        return _server_error("updating the book", e)
    return BookModel.from_book(book)


@app.delete("/books/{book_id}", response_model=DeletedModel)
def delete_book(book_id: int, lib: Library = Depends(get_library)):
    """Delete a book permanently."""
    try:
        book = lib.delete_book(book_id)
    except BookNotFoundError as e:
        return _not_found(e)
    except Exception as e:
        return _server_error("deleting the book", e)
    return DeletedModel(message=f"Book '{book.title}' has been successfully deleted", id=book_id)


# --- Health Check ---
@app.get("/health")
def health_check(lib: Library = Depends(get_library)):
    """Health check endpoint."""
    try:
        total_books = lib.store.count()
    except Exception as e:
        return _server_error("checking health", e)
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "total_books": total_books,
    }


# --- Static Files ---
app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")


@app.get("/", include_in_schema=False)
def read_root():
    """Serve the single-page UI."""
    return FileResponse(STATIC_DIR / "index.html")
