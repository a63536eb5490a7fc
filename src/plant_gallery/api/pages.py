"""HTML rendering for the gallery page."""

from jinja2 import Environment, select_autoescape

from plant_gallery.domain.forms import has_safe_scheme
from plant_gallery.services.sessions import GallerySession

GALLERY_TITLE = "Plants gallery"
NOT_FOUND_TEXT = "Images not found"

_env = Environment(autoescape=select_autoescape(default_for_string=True))


def safe_href(value: str) -> str:
    """Replace links with a non-web scheme by an inert anchor."""
    return value if has_safe_scheme(value) else "#"


_env.filters["safe_href"] = safe_href

_GALLERY_TEMPLATE = _env.from_string(
    """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>{{ title }}</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 0; }
      main { max-width: 80rem; margin: 0 auto; padding: 4rem 1rem; }
      header { display: flex; flex-direction: column; align-items: center;
               gap: 2.5rem; margin-bottom: 2.5rem; }
      h1 { font-weight: 600; font-size: 2.25rem; text-align: center; }
      .button { background: #000; color: #fff; border: 0; border-radius: 0.75rem;
                font-weight: 500; padding: 0.5rem 1rem; width: 12rem; cursor: pointer; }
      .grid { display: grid; gap: 2.5rem 1.5rem;
              grid-template-columns: repeat(auto-fill, minmax(16rem, 1fr)); }
      .tile { color: inherit; text-decoration: none; }
      .frame { aspect-ratio: 7 / 8; overflow: hidden; border-radius: 0.5rem;
               background: #e5e7eb; }
      .frame img { width: 100%; height: 100%; object-fit: cover;
                   transition: all 700ms ease-in-out; }
      .tile:hover img { opacity: 0.75; }
      .is-loading { transform: scale(1.1); filter: blur(40px) grayscale(100%); }
      .is-loaded { transform: scale(1); filter: blur(0) grayscale(0); }
      .tile h3 { margin-top: 1rem; font-size: 0.875rem; color: #374151; }
      .tile p { margin-top: 0.25rem; font-size: 1.125rem; font-weight: 500;
                color: #111827; }
      .overlay { position: fixed; inset: 0; background: rgba(0, 0, 0, 0.25);
                 display: flex; align-items: center; justify-content: center; }
      .panel { background: #fff; border-radius: 1rem; padding: 1.5rem;
               width: 100%; max-width: 28rem; }
      .panel form { display: flex; flex-direction: column; align-items: center;
                    gap: 1.5rem; }
      .panel input { width: 100%; padding: 0.625rem; border: 1px solid #d1d5db;
                     border-radius: 0.5rem; background: #f9fafb; }
      .error { color: #b91c1c; font-size: 0.875rem; }
    </style>
  </head>
  <body>
    <main>
      <header>
        <h1>{{ title }}</h1>
        <form method="post" action="/sessions/{{ session.id }}/dialog/open">
          <button class="button" type="submit">Upload</button>
        </form>
      </header>
      {% if session.view.found %}
      <div class="grid">
        {% for tile in session.view.tiles %}
        <a class="tile" target="_blank" href="{{ tile.record.image_src | safe_href }}"
           data-image-id="{{ tile.record.id }}">
          <div class="frame">
            <img alt="" src="{{ tile.record.image_src | safe_href }}"
                 class="{{ 'is-loading' if tile.loading else 'is-loaded' }}"
                 onload="this.className = 'is-loaded'" />
          </div>
          <h3>{{ tile.record.name }}</h3>
          <p>{{ tile.record.username }}</p>
        </a>
        {% endfor %}
      </div>
      {% else %}
      <h1 class="not-found">{{ not_found }}</h1>
      {% endif %}
    </main>
    {% if session.dialog.is_open %}
    <div class="overlay" role="dialog" aria-modal="true">
      <div class="panel">
        <form method="post" action="/sessions/{{ session.id }}/upload">
          <h3>Add new plant</h3>
          {% for field in session.dialog.form.fields.values() %}
          <input type="text" name="{{ field.name }}" value="{{ field.value }}"
                 placeholder="{{ field.placeholder }}" />
          {% if field.name in session.dialog.form.errors %}
          <span class="error">{{ session.dialog.form.errors[field.name] }}</span>
          {% endif %}
          {% endfor %}
          <button class="button" type="submit">Save</button>
        </form>
        <form method="post" action="/sessions/{{ session.id }}/dialog/close">
          <button type="submit">Close</button>
        </form>
      </div>
    </div>
    {% endif %}
  </body>
</html>
"""
)


def render_gallery_page(session: GallerySession) -> str:
    """Render the full gallery page for a session."""
    return _GALLERY_TEMPLATE.render(
        title=GALLERY_TITLE,
        not_found=NOT_FOUND_TEXT,
        session=session,
    )
