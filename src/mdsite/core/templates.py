"""Built-in Jinja2 page templates"""

BASE = """\
<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{% block title %}{{ site.title }}{% endblock %}</title>
</head>
<body>
<header><a href="{{ site.url('index.html') }}">{{ site.title }}</a></header>
<main>
{% block main %}{% endblock %}
</main>
</body>
</html>
"""

POST = """\
{% extends "base.html" %}
{% block title %}{{ post.title }} | {{ site.title }}{% endblock %}
{% block main %}
<article>
<h1>{{ post.title }}</h1>
<p class="meta"><time datetime="{{ post.date.isoformat() }}">{{ post.date.strftime('%Y-%m-%d') }}</time>
{%- if post.draft %} <strong>draft</strong>{% endif %}</p>
{% if categories %}<p class="categories">
{%- for name, href in categories %}{% if href %}<a href="{{ href }}">{{ name }}</a>{% else %}{{ name }}{% endif %}{% if not loop.last %}, {% endif %}{% endfor -%}
</p>{% endif %}
{{ content }}
{% if tags %}<p class="tags">
{%- for name, href in tags %}{% if href %}<a href="{{ href }}">#{{ name }}</a>{% else %}#{{ name }}{% endif %}{% if not loop.last %} {% endif %}{% endfor -%}
</p>{% endif %}
</article>
{% endblock %}
"""

LISTING = """\
{% extends "base.html" %}
{% block title %}{{ heading }} | {{ site.title }}{% endblock %}
{% block main %}
<h1>{{ heading }}</h1>
<ul class="posts">
{% for post in posts %}<li><time datetime="{{ post.date.isoformat() }}">{{ post.date.strftime('%Y-%m-%d') }}</time> <a href="{{ site.url('posts', post.slug ~ '.html') }}">{{ post.title }}</a></li>
{% endfor %}</ul>
{% endblock %}
"""

TEMPLATES = {
    "base.html": BASE,
    "post.html": POST,
    "listing.html": LISTING,
}
