"""Single-page form over the exercise tracker API."""

FORM_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Exercise Tracker</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      form { margin-bottom: 1.5rem; }
      input { padding: 0.4rem 0.6rem; margin: 0.2rem 0; }
      button { padding: 0.4rem 0.8rem; }
      #status { background: #e8f0fe; padding: 0.6rem; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <h1>Exercise Tracker</h1>
    <p id="status">Ready.</p>

    <h2>Create a user</h2>
    <form id="create-user">
      <input name="username" placeholder="Username" required />
      <button type="submit">Submit</button>
    </form>

    <h2>Add an exercise</h2>
    <form id="add-exercise">
      <input name="user_id" placeholder="User ID*" required />
      <input name="description" placeholder="Description*" required />
      <input name="duration" type="number" placeholder="Duration (min.)*" required />
      <input name="date" type="date" />
      <button type="submit">Submit</button>
    </form>

    <h2>Get the exercise log</h2>
    <form id="get-log">
      <input name="user_id" placeholder="User ID*" required />
      <input name="from" type="date" />
      <input name="to" type="date" />
      <input name="limit" type="number" placeholder="Limit" />
      <button type="submit">Get log</button>
    </form>

    <pre id="output"></pre>
    <script>
      const statusLine = document.getElementById('status');
      const output = document.getElementById('output');

      async function send(method, path, body, success) {
        statusLine.textContent = 'Loading...';
        const options = { method, headers: { 'Content-Type': 'application/json' } };
        if (body) { options.body = JSON.stringify(body); }
        let res;
        let data;
        try {
          res = await fetch(path, options);
          data = await res.json();
        } catch (err) {
          statusLine.textContent = 'Request failed' + (res ? ' (' + res.status + ')' : '') + '.';
          return;
        }
        if (!res.ok) {
          statusLine.textContent = data.message || ('Error: ' + res.status);
          return;
        }
        statusLine.textContent = success;
        output.textContent = JSON.stringify(data, null, 2);
      }

      function fields(form) {
        return Object.fromEntries(new FormData(form).entries());
      }

      document.getElementById('create-user').onsubmit = (e) => {
        e.preventDefault();
        send('POST', '/api/users', fields(e.target), 'User created.');
      };
      document.getElementById('add-exercise').onsubmit = (e) => {
        e.preventDefault();
        const f = fields(e.target);
        const path = '/api/users/' + encodeURIComponent(f.user_id) + '/exercises';
        send('POST', path, { description: f.description, duration: f.duration, date: f.date || null }, 'Exercise added.');
      };
      document.getElementById('get-log').onsubmit = (e) => {
        e.preventDefault();
        const f = fields(e.target);
        const params = new URLSearchParams();
        for (const key of ['from', 'to', 'limit']) { if (f[key]) { params.set(key, f[key]); } }
        const path = '/api/users/' + encodeURIComponent(f.user_id) + '/logs?' + params;
        send('GET', path, null, 'Exercise log fetched.');
      };
    </script>
  </body>
</html>
"""
