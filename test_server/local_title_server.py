#!/usr/bin/env python3

from flask import Flask, Response, request, render_template_string

app = Flask(__name__)

HOME_PAGE = '''<!DOCTYPE html>
<html>
<head>
    <title> Example Domain </title>
</head>
<body>
    <h1>Example Domain</h1>
    <p>This domain is for use in illustrative examples in documents.</p>
</body>
</html>
'''

MULTILINE_PAGE = '''<html><head><TITLE>
    Breaking
    News   &raquo;   Today
</Title></head><body></body></html>
'''

ENTITY_PAGE = '''<html><head>
<title>Caf&eacute; &copy; 2024 &amp; more %41%42 100%</title>
</head></html>
'''

UNTITLED_PAGE = '''<html><head></head><body><p>No title here</p></body></html>
'''

UNTERMINATED_PAGE = '''<html><head><title>Never closed</head><body></body></html>
'''

LONG_PAGE = '<html><head><title>' + 'x' * 90 + '</title></head></html>\n'

FORM_PAGE = '''<!DOCTYPE html>
<html>
<head>
    <title>Leave a Message</title>
</head>
<body>
    <form method="post" action="/form">
        <input type="text" name="name">
        <input type="text" name="message">
        <input type="submit" value="Send">
    </form>
</body>
</html>
'''

THANKS_PAGE = '''<!DOCTYPE html>
<html>
<head>
    <title>Thanks {{ name }}</title>
</head>
<body>
    <p>{{ message }}</p>
</body>
</html>
'''


def relative_redirect(location, status=302):
    response = Response('', status=status, headers={'Location': location})
    response.autocorrect_location_header = False
    return response


@app.route('/')
def home():
    return HOME_PAGE


@app.route('/multiline')
def multiline():
    return MULTILINE_PAGE


@app.route('/entities')
def entities():
    return ENTITY_PAGE


@app.route('/untitled')
def untitled():
    return UNTITLED_PAGE


@app.route('/unterminated')
def unterminated():
    return UNTERMINATED_PAGE


@app.route('/long')
def long_title():
    return LONG_PAGE


@app.route('/plain')
def plain():
    return Response('<title>Not really HTML</title>\n', mimetype='text/plain')


@app.route('/missing')
def missing():
    return Response('<html><head><title>Not Found</title></head></html>\n', status=404)


@app.route('/moved')
def moved():
    return relative_redirect('/', status=301)


@app.route('/absolute')
def absolute():
    return relative_redirect(f"{request.host_url}multiline")


@app.route('/chain/<int:n>')
def chain(n):
    if n <= 0:
        return HOME_PAGE
    return relative_redirect(f'/chain/{n - 1}')


@app.route('/loop')
def loop():
    return relative_redirect('/loop')


@app.route('/no-location')
def no_location():
    return Response('', status=302)


@app.route('/form', methods=['GET', 'POST'])
def form():
    if request.method == 'POST':
        return render_template_string(THANKS_PAGE,
                                      name=request.form.get('name', ''),
                                      message=request.form.get('message', ''))
    return FORM_PAGE


if __name__ == '__main__':
    print("Starting title test site on http://localhost:8000")
    print("Try: python httptitle.py --url http://localhost:8000/moved")
    app.run(host='0.0.0.0', port=8000, debug=True)
