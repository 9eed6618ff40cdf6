import json
import logging
from collections import defaultdict

logger = logging.getLogger(__name__)

EVICT = "evict"
HOME = "home"


def move_class(parent_state, s):
    # evictions add an amphipod to the hallway, homecomings take one away
    if len(s.hallway.amphipods()) > len(parent_state.hallway.amphipods()):
        return EVICT
    return HOME


class GraphLogger:
    """Records the burrows A* expands and writes them out as an HTML search-tree viewer.

    Each edge remembers the move class that produced the child and the energy it
    cost, so the viewer can show where the search spent its budget.
    """

    def __init__(self, render):
        self.render = render
        self.id_of = {}
        self.nodes = []
        self.edges = []
        self.root_id = None
        self.goal_id = None

    def add_or_get(self, s, g, f, parent_state):
        if s in self.id_of:
            return self.id_of[s]
        node_id = len(self.nodes)
        parent_id = self.id_of.get(parent_state) if parent_state is not None else None
        if parent_id is None:
            depth = 0
            if self.root_id is None:
                self.root_id = node_id
        else:
            depth = self.nodes[parent_id]["depth"] + 1
        self.nodes.append({
            "id": node_id,
            "depth": depth,
            "g": g,
            "f": f,
            "in_path": False,
            "layout": self.render(s),
        })
        self.id_of[s] = node_id
        if parent_id is not None:
            self.edges.append({
                "source": parent_id,
                "target": node_id,
                "cost": g - self.nodes[parent_id]["g"],
                "move": move_class(parent_state, s),
            })
        return node_id

    def mark_solution_path(self, path):
        last = None
        for s in path:
            nid = self.id_of.get(s)
            if nid is not None:
                self.nodes[nid]["in_path"] = True
                last = nid
        self.goal_id = last

    def explored_below(self):
        """Number of expanded descendants per node id."""
        children = defaultdict(list)
        for e in self.edges:
            children[e["source"]].append(e["target"])
        below = {}
        # depth never decreases along an edge, so deepest-first is a valid post-order
        for n in sorted(self.nodes, key=lambda n: n["depth"], reverse=True):
            below[n["id"]] = sum(1 + below[c] for c in children[n["id"]])
        return below

    def write_html(self, out_path="astar_exploration.html"):
        below = self.explored_below()
        data = {
            "nodes": [dict(n, below=below[n["id"]]) for n in self.nodes],
            "edges": self.edges,
            "root_id": self.root_id,
            "goal_id": self.goal_id,
            "max_g": max((n["g"] for n in self.nodes), default=0),
        }

        html = f"""<!doctype html>
<html>
<head>
<meta charset="utf-8"/>
<title>Burrow search tree</title>
<style>
  body {{margin:0;display:flex;height:100vh;font-family:sans-serif;}}
  #tree {{flex:3;}}
  #side {{flex:1;padding:10px;border-left:1px solid #ccc;overflow:auto;}}
  #layout {{font:18px monospace;background:#eee;padding:6px;}}
  .evict {{color:#c92a2a;}} .home {{color:#1864ab;}}
</style>
<script src="https://unpkg.com/cytoscape@3.28.1/dist/cytoscape.min.js"></script>
<script>
const DATA = {json.dumps(data)};

window.onload = () => {{
  const byId = new Map(DATA.nodes.map(n => [n.id, n]));
  const out = new Map();
  DATA.edges.forEach(e => {{
    if(!out.has(e.source)) out.set(e.source, []);
    out.get(e.source).push(e);
  }});

  // energy spent so far, cheap states green and expensive ones red
  const shade = n => `hsl(${{120 - 120 * n.g / Math.max(DATA.max_g, 1)}},60%,45%)`;
  const nodeEl = n => ({{group:'nodes', data:{{id:'n'+n.id, node:n}}}});
  const edgeEl = e => ({{group:'edges', data:{{id:'e'+e.target, source:'n'+e.source, target:'n'+e.target, edge:e}}}});

  // start with the solution path and the alternatives branching off it
  const shown = new Set([DATA.root_id]);
  DATA.nodes.filter(n => n.in_path).forEach(n => shown.add(n.id));
  [...shown].forEach(id => (out.get(id) || []).forEach(e => shown.add(e.target)));

  const cy = cytoscape({{
    container: document.getElementById('tree'),
    elements: [
      ...[...shown].filter(id => byId.has(id)).map(id => nodeEl(byId.get(id))),
      ...DATA.edges.filter(e => shown.has(e.source) && shown.has(e.target)).map(edgeEl),
    ],
    layout: {{name:'breadthfirst', directed:true, roots:['n'+DATA.root_id]}},
    style: [
      {{selector:'node', style:{{
        'background-color': ele => shade(ele.data('node')),
        'border-width': ele => ele.data('node').in_path ? 3 : 0,
        'label': ele => 'g=' + ele.data('node').g,
        'font-size': 8, 'width': 12, 'height': 12}}}},
      {{selector:'edge', style:{{
        'line-color': ele => ele.data('edge').move === '{EVICT}' ? '#c92a2a' : '#1864ab',
        'label': ele => ele.data('edge').cost,
        'font-size': 7, 'width': 1, 'curve-style': 'bezier',
        'target-arrow-shape': 'triangle'}}}},
    ],
  }});

  cy.on('tap', 'node', evt => {{
    const n = evt.target.data('node');
    document.getElementById('layout').textContent = n.layout;
    document.getElementById('info').textContent =
      `node ${{n.id}}: depth ${{n.depth}}, g=${{n.g}}, f=${{n.f}}, ${{n.below}} expanded below`;
    const moves = document.getElementById('moves');
    moves.innerHTML = '';
    (out.get(n.id) || []).forEach(e => {{
      const li = document.createElement('li');
      li.className = e.move;
      li.textContent = `${{e.move}} -> node ${{e.target}} (cost ${{e.cost}})`;
      moves.appendChild(li);
    }});
  }});

  // double click reveals the expanded children of a node
  cy.on('dbltap', 'node', evt => {{
    const n = evt.target.data('node');
    const pos = evt.target.position();
    const added = (out.get(n.id) || []).filter(e => cy.getElementById('n'+e.target).empty());
    added.forEach((e, i) => {{
      cy.add({{...nodeEl(byId.get(e.target)), position:{{x: pos.x + (i - added.length / 2) * 40, y: pos.y + 70}}}});
      cy.add(edgeEl(e));
    }});
  }});
}};
</script>
</head>
<body>
<div id="tree"></div>
<div id="side">
  <pre id="layout">click a node</pre>
  <p id="info"></p>
  <ul id="moves"></ul>
</div>
</body>
</html>"""
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(html)
        logger.info("wrote search tree viewer to %s", out_path)
