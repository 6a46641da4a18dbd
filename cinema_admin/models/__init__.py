from .mixins.timestamp import TimestampMixin as TimestampMixin, SoftDeleteMixin as SoftDeleteMixin
from .user import Role as Role, User as User, PROTECTED_ROLES as PROTECTED_ROLES
from .movie import Genre as Genre, Person as Person, MovieCast as MovieCast, CastRole as CastRole
from .movie import Language as Language, Movie as Movie, MovieLanguage as MovieLanguage, MovieRating as MovieRating
from .movie import movie_genres as movie_genres
from .theater import Theater as Theater, Screen as Screen, Seat as Seat, SeatStatus as SeatStatus
from .screening import Screening as Screening

__all__ = [
    "TimestampMixin", "SoftDeleteMixin",
    "Role", "User", "PROTECTED_ROLES",
    "Genre", "Person", "MovieCast", "CastRole",
    "Language", "Movie", "MovieLanguage", "MovieRating", "movie_genres",
    "Theater", "Screen", "Seat", "SeatStatus",
    "Screening",
]
